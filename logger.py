"""
Logging configuration for the CRA engine, service and CLI.

Standard-library logging, configured once from `config.Config`.
"""

import logging
import sys
from typing import Optional

from config import get_config


# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}
_initialized: bool = False

# Chatty libraries kept at WARNING unless we are debugging
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    stream: Optional[object] = None
):
    """
    Initialize the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for log messages
        stream: Output stream (defaults to sys.stderr)
    """
    global _initialized

    config = get_config()

    log_level = level or config.log_level
    log_format = format_string or config.log_format
    output_stream = stream or sys.stderr

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(output_stream)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(console_handler)

    third_party_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance
    """
    global _initialized, _loggers

    if not _initialized:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]
