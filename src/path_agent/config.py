from dataclasses import dataclass
from typing import Optional


@dataclass
class PathAgentConfig:
    # Locations
    home_dir: Optional[str] = None
    username: Optional[str] = None
    project_root: Optional[str] = None
    dialect: str = 'auto'  # 'auto', 'wsl' or 'none'

    # Inference
    ai_enabled: bool = True
    inference_backend: str = 'http'  # 'http', 'langchain' or 'simulated'
    inference_url: str = 'http://localhost:5050/api/ai/chat'
    inference_provider: str = 'claude'
    inference_model: str = 'claude-3-sonnet-20240229'
    ai_timeout_seconds: float = 12.0

    # Caching
    ai_cache_ttl_seconds: float = 300.0
    scan_cache_ttl_seconds: float = 30.0
    cache_max_entries: int = 1000

    # Matching thresholds
    folder_match_threshold: float = 0.7
    learning_similarity_threshold: float = 0.7
    suggestion_similarity_threshold: float = 0.6

    # Learning
    max_recent_queries: int = 100
    max_pattern_entries: int = 5000

    # Logging
    log_level: str = 'INFO'
    configure_logging: bool = False
