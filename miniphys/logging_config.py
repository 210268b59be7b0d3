"""
Logging Configuration
Sets up the logger for the 'miniphys' namespace.
"""
import logging
import os
import sys
from typing import Optional

_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _parse_level(level_str: Optional[str], default: int) -> int:
    if not level_str:
        return default
    mapping = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }
    return mapping.get(level_str.strip().upper(), default)


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'miniphys' logger.

    Args:
        level: Logging level. When omitted, the LOG_LEVEL environment variable
            is consulted, falling back to INFO.
        log_file: Optional path to also write logs to.
    """
    if level is None:
        level = _parse_level(os.environ.get("LOG_LEVEL"), logging.INFO)

    logger = logging.getLogger("miniphys")
    logger.setLevel(level)

    # avoid duplicate handlers when the demo restarts
    if logger.handlers:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
