import logging
import sys
from pathlib import Path
from typing import Optional
from newsassist.utils.config import get_config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_to_console: Optional[bool] = None
) -> logging.Logger:
    """
    Set up a logger with file and/or console handlers.

    Args:
        name: Logger name (usually __name__ of the module)
        level: Log level (DEBUG, INFO, WARNING, ERROR). If None, uses config
        log_file: Path to log file. If None, uses config; empty string disables it
        log_to_console: Whether to log to stdout. If None, uses config

    Returns:
        Configured logger instance
    """
    config = get_config()

    if level is None:
        level = config.LOG_LEVEL
    if log_file is None:
        log_file = config.LOG_FILE
    if log_to_console is None:
        log_to_console = config.LOG_TO_CONSOLE

    numeric_level = getattr(logging, level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    # Re-running setup must not stack handlers
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = []

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding='utf-8'))

    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False

    return logger


_loggers: dict[str, logging.Logger] = {}

def get_logger(name: str) -> logging.Logger:
    """Get or create a cached logger for the given module."""
    if name not in _loggers:
        _loggers[name] = setup_logger(name)
    return _loggers[name]

def clear_loggers() -> None:
    """Close and forget all cached loggers. Useful for testing."""
    for logger in _loggers.values():
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
    _loggers.clear()
