"""
Module: logger.py
Description: Structured logging configuration for cloudprobe.

Configures structlog for JSON output. Log lines go to stderr so that
stdout stays free for program output (message bodies, object contents).

Key Components:
- JSON output with timestamp and level processors
- configure_logging() to apply a log level at process start
- get_logger() helper function

Dependencies: structlog, logging, datetime
"""

import logging
import sys
from datetime import datetime, timezone

import structlog
from structlog.typing import FilteringBoundLogger


def _add_timestamp(logger, method_name, event_dict):
    """
    Add ISO 8601 timestamp to log entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    """Add log level to event dictionary."""
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog for JSON output at the given level.

    Loggers are not cached, so a later call (for example from the CLI
    after settings are loaded) applies to every module-level logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Raises:
        ValueError: If level is not a known logging level
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=[
            _add_timestamp,
            _add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


configure_logging("INFO")


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Message sent", message_id="m1")
        {"message_id": "m1", "event": "Message sent", "timestamp": "...", "level": "INFO"}
    """
    return structlog.get_logger(name)
