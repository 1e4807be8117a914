# src/wordtally/logging_config.py
"""
Logging configuration for the wordtally CLI.

Library modules log through logging.getLogger(__name__) and never add
handlers; the CLI calls get_logger() once to attach a console handler.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

from wordtally.config import debug_from_env

LOGGER_NAME = "wordtally"

# Log rotation config
MAX_LOG_SIZE = 2 * 1024 * 1024  # 2MB per file
MAX_LOG_FILES = 5

_logger: Optional[logging.Logger] = None


def get_logger(debug: Optional[bool] = None) -> logging.Logger:
    """
    Get or create the configured "wordtally" logger.

    Args:
        debug: Force debug level. Defaults to the WORDTALLY_DEBUG env var.

    Returns:
        Configured logger instance
    """
    global _logger

    if debug is None:
        debug = debug_from_env()

    if _logger is not None:
        set_debug_mode(debug)
        return _logger

    _logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    _logger.setLevel(level)

    # Avoid duplicate handlers
    if not _logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _logger.addHandler(console_handler)

    return _logger


def add_file_handler(log_file: Union[str, Path]) -> logging.Handler:
    """Attach a rotating file handler to the wordtally logger."""
    logger = get_logger()
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=MAX_LOG_FILES,
        encoding="utf-8",
    )
    file_handler.setLevel(logger.level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)
    return file_handler


def set_debug_mode(enabled: bool) -> None:
    """Switch the wordtally logger and its handlers between DEBUG and INFO."""
    if _logger is None:
        return
    new_level = logging.DEBUG if enabled else logging.INFO
    _logger.setLevel(new_level)
    for handler in _logger.handlers:
        handler.setLevel(new_level)
