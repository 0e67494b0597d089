"""
Process-wide logging setup.

Library modules only create module loggers; the application entry point
decides where records go.
"""
import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once.
    
    :param level: Level name such as "DEBUG" or "INFO"
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
