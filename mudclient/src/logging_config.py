"""
Logging configuration for the client.

Provides leveled logging with configurable console and file output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import get_config

ROOT_LOGGER_NAME = "mudclient"


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Configure logging for the client.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR). Uses config if not specified.
        log_file: Optional path to log file
        log_to_console: Whether to log to console

    Returns:
        The root logger for the client
    """
    if log_level is None:
        config = get_config()
        log_level = config.debug.log_level

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # stdout carries game text; log records go to stderr
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")
