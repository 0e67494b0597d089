"""
Configuration validation utilities.

Typed accessors for environment variables with helpful error messages.
"""
import os
import warnings
from typing import Optional
from .exceptions import ConfigurationError


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.
    
    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or a placeholder
    """
    value = os.getenv(key)
    
    if not value:
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Please set it using one of these methods:\n"
            f"  1. Environment variable: export {key}='your-value'\n"
            f"  2. .env file: Create .env in project root with {key}=your-value\n"
            f"  3. See .env.example for template\n\n"
            f"Description: {desc}"
        )
    
    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value.\n"
            f"Please set a real value. Current value: {_mask_secret(value)}\n"
            f"See .env.example for the correct format."
        )
    
    return value


def get_optional_env(
    key: str,
    default: Optional[str] = None,
    check_placeholder: bool = True,
) -> Optional[str]:
    """
    Get optional environment variable.
    
    :param key: Environment variable name
    :param default: Default value if not set
    :param check_placeholder: Reject values that look like unfilled placeholders.
        Turn off for paths and URLs, where words like "todo" are legitimate.
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)
    
    if check_placeholder and value and _is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default
    
    return value


def get_bool_env(key: str, default: bool) -> bool:
    """Read a boolean flag ("true"/"1"/"yes" are truthy)."""
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def get_float_env(key: str, default: float) -> float:
    """
    Read a float environment variable.
    
    :raises: ConfigurationError if the value is not a number
    """
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got '{value}'")


def get_int_env(key: str, default: int) -> int:
    """
    Read an integer environment variable.
    
    :raises: ConfigurationError if the value is not an integer
    """
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'")


def validate_threshold(value: float, name: str) -> float:
    """Ensure a similarity threshold lies in [0.0, 1.0]."""
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be between 0.0 and 1.0, got {value}")
    return value


def validate_positive(value: float, name: str) -> float:
    """Ensure a duration or size is strictly positive."""
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def validate_choice(value: str, name: str, choices: tuple) -> str:
    """Ensure value is one of the accepted choices (case-insensitive)."""
    normalized = value.strip().lower()
    if normalized not in choices:
        raise ConfigurationError(
            f"{name} must be one of {list(choices)}, got '{value}'"
        )
    return normalized


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate file/directory path.
    
    :param path: Path to validate
    :param path_name: Name of the path (for error messages)
    :param must_exist: Whether path must exist
    :return: Validated path
    :raises: ConfigurationError if invalid
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")
    
    if must_exist and not os.path.exists(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Please check the path and ensure the directory exists."
        )
    
    return path


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False
    
    placeholder_patterns = [
        "your_",
        "placeholder",
        "xxx",
        "sk-0000",
        "gsk_0000",
        "replace",
        "todo",
    ]
    
    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """
    Mask secret for safe display in error messages.
    
    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"
    
    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
