"""
Logging Configuration
Sets up the global logger for the application.
"""
import logging
import os
import sys
from typing import Optional


def level_from_env(default: int = logging.INFO) -> int:
    """Reads the TIMERTABLE_LOG_LEVEL environment variable (e.g. "DEBUG")."""
    name = os.environ.get("TIMERTABLE_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def log_file_from_env() -> Optional[str]:
    """Reads TIMERTABLE_LOG_FILE; unset or blank means console only."""
    path = os.environ.get("TIMERTABLE_LOG_FILE", "").strip()
    return path or None


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'timertable' namespace.

    Engine hooks, command outcomes and refreshes all log below this namespace.
    main.py passes the TIMERTABLE_LOG_LEVEL and TIMERTABLE_LOG_FILE environment
    settings here (see level_from_env and log_file_from_env).

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also write logs to; truncated on start.
    """
    logger = logging.getLogger("timertable")
    logger.setLevel(level)

    # Avoid duplicate handlers when the window is reopened
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
