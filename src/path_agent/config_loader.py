"""
Configuration loader with validation.

Builds a PathAgentConfig from PATH_AGENT_* environment variables.
"""
import os

from dotenv import load_dotenv
from .config import PathAgentConfig
from .config_validator import (
    get_optional_env,
    get_bool_env,
    get_float_env,
    get_int_env,
    validate_choice,
    validate_path,
    validate_positive,
    validate_threshold,
)
from .dialects import is_drive_path

ENV_PREFIX = "PATH_AGENT_"

DIALECT_CHOICES = ("auto", "wsl", "none")
BACKEND_CHOICES = ("http", "langchain", "simulated")


def _env(name: str) -> str:
    return f"{ENV_PREFIX}{name}"


def load_config_from_env() -> PathAgentConfig:
    """
    Load configuration from environment variables with validation.
    
    Usage:
        config = load_config_from_env()
        app = PathAgentApp(config)
        app.initialize()
    
    :return: Validated PathAgentConfig instance
    :raises: ConfigurationError if values are malformed or out of range
    """
    # Load .env file if it exists (for local development)
    load_dotenv()
    
    defaults = PathAgentConfig()
    config = PathAgentConfig(
        home_dir=get_optional_env(_env("HOME_DIR"), check_placeholder=False),
        username=get_optional_env(_env("USERNAME")),
        project_root=get_optional_env(_env("PROJECT_ROOT"), check_placeholder=False),
        dialect=get_optional_env(_env("DIALECT")) or defaults.dialect,
        ai_enabled=get_bool_env(_env("AI_ENABLED"), defaults.ai_enabled),
        inference_backend=get_optional_env(_env("INFERENCE_BACKEND")) or defaults.inference_backend,
        inference_url=(
            get_optional_env(_env("INFERENCE_URL"), check_placeholder=False)
            or defaults.inference_url
        ),
        inference_provider=get_optional_env(_env("INFERENCE_PROVIDER")) or defaults.inference_provider,
        inference_model=get_optional_env(_env("INFERENCE_MODEL")) or defaults.inference_model,
        ai_timeout_seconds=get_float_env(_env("AI_TIMEOUT"), defaults.ai_timeout_seconds),
        ai_cache_ttl_seconds=get_float_env(
            _env("AI_CACHE_TTL"), defaults.ai_cache_ttl_seconds
        ),
        scan_cache_ttl_seconds=get_float_env(
            _env("SCAN_CACHE_TTL"), defaults.scan_cache_ttl_seconds
        ),
        cache_max_entries=get_int_env(_env("CACHE_MAX_ENTRIES"), defaults.cache_max_entries),
        folder_match_threshold=get_float_env(
            _env("FOLDER_MATCH_THRESHOLD"), defaults.folder_match_threshold
        ),
        learning_similarity_threshold=get_float_env(
            _env("LEARNING_SIMILARITY_THRESHOLD"), defaults.learning_similarity_threshold
        ),
        suggestion_similarity_threshold=get_float_env(
            _env("SUGGESTION_SIMILARITY_THRESHOLD"), defaults.suggestion_similarity_threshold
        ),
        max_recent_queries=get_int_env(_env("MAX_RECENT_QUERIES"), defaults.max_recent_queries),
        max_pattern_entries=get_int_env(
            _env("MAX_PATTERN_ENTRIES"), defaults.max_pattern_entries
        ),
        log_level=get_optional_env(_env("LOG_LEVEL")) or defaults.log_level,
        configure_logging=get_bool_env(_env("CONFIGURE_LOGGING"), True),
    )
    
    return validate_config(config)


def validate_config(config: PathAgentConfig) -> PathAgentConfig:
    """
    Validate an already-built config in place.
    
    :param config: PathAgentConfig to check
    :return: The same config, with choice fields normalized
    :raises: ConfigurationError on the first invalid value
    """
    config.dialect = validate_choice(config.dialect, "dialect", DIALECT_CHOICES)
    config.inference_backend = validate_choice(
        config.inference_backend, "inference_backend", BACKEND_CHOICES
    )
    
    validate_positive(config.ai_timeout_seconds, "ai_timeout_seconds")
    validate_positive(config.ai_cache_ttl_seconds, "ai_cache_ttl_seconds")
    validate_positive(config.scan_cache_ttl_seconds, "scan_cache_ttl_seconds")
    validate_positive(config.cache_max_entries, "cache_max_entries")
    validate_positive(config.max_recent_queries, "max_recent_queries")
    validate_positive(config.max_pattern_entries, "max_pattern_entries")
    
    validate_threshold(config.folder_match_threshold, "folder_match_threshold")
    validate_threshold(config.learning_similarity_threshold, "learning_similarity_threshold")
    validate_threshold(
        config.suggestion_similarity_threshold, "suggestion_similarity_threshold"
    )
    
    # Drive-letter homes on a POSIX host are reached through the dialect translator
    if config.home_dir and (os.name == "nt" or not is_drive_path(config.home_dir)):
        validate_path(config.home_dir, "home_dir", must_exist=True)
    
    return config
