"""Logging setup for the readeof package logger."""

import logging
import os
import sys
from typing import Optional

APP_LOGGER_NAME = "readeof"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure a logger that writes to stderr and optionally to a file.

    Calling it again for the same name adjusts the level of the existing
    handlers instead of adding new ones.

    Args:
        name: Logger name
        log_level: Level name; unknown names fall back to INFO
        log_file: Optional path to log file, its directory is created

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # stdout carries the tailed lines
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def init_app_logger(settings) -> logging.Logger:
    """
    Configure the ``readeof`` logger from settings.

    Module loggers (``readeof.utils.boundary_scanner``, ``readeof.services.*``)
    propagate to it.
    """
    return setup_logger(APP_LOGGER_NAME, log_level=settings.log_level, log_file=settings.log_file)
