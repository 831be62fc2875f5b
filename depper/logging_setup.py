"""
logging_setup.py - Opt-in logging configuration

The library only creates module loggers. Applications that want depper's
log output on a handler call setup_logging() themselves.
"""

from __future__ import annotations
from typing import Optional
import json
import logging
import sys

from .config import DEFAULT_LOG_FORMAT, LoggingConfig


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record):
        return json.dumps({
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        })


def setup_logging(
    level: str = "INFO",
    log_file: str = None,
    json_format: bool = False,
    log_format: str = DEFAULT_LOG_FORMAT,
) -> logging.Logger:
    """
    Configure the "depper" logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        log_format: Format string for plain-text logs

    Returns:
        The configured package logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(log_format)

    package_logger = logging.getLogger("depper")
    package_logger.setLevel(log_level)

    # Calling setup twice must not duplicate output
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        package_logger.addHandler(file_handler)

    return package_logger


def setup_logging_from_config(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """Configure logging from a LoggingConfig (environment defaults if omitted)."""
    config = config or LoggingConfig.from_env()
    return setup_logging(
        level=config.level,
        log_file=config.log_file,
        json_format=config.json_logs,
        log_format=config.format,
    )
