"""
Logger Utility Module

This module provides functions for setting up and configuring the application logger.
"""

import logging
import sys
from typing import Optional

from chat_relay.utils.config import get_config_value

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_level() -> str:
    """
    Get the log level from configuration.

    Returns:
        str: The log level (INFO by default).
    """
    return str(get_config_value("log_level", "INFO") or "INFO")


def setup_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name (Optional[str], optional): The name of the logger. Defaults to None.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name or "chat_relay")

    # Avoid adding duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    log_level_str = get_log_level().upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        logging.Logger: The logger.
    """
    return logging.getLogger(name)
