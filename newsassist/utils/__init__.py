"""Utilities: configuration and logging."""

from .config import Config, get_config, reload_config
from .logger import get_logger, setup_logger, clear_loggers

__all__ = [
    "Config",
    "get_config",
    "reload_config",
    "get_logger",
    "setup_logger",
    "clear_loggers",
]
