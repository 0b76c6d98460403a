"""Centralized logging configuration for the hooks.

Hooks talk to the host over stdout, so console logging always goes to
stderr and is only enabled in debug mode. Supports:
- Optional rotating log file (text or JSON)
- Category loggers for the hook components
"""

import json
import logging
import logging.handlers
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

LOGGER_NAME = "noodlbox_hooks"


class LogCategory(Enum):
    """Log categories for the hook components."""

    DISPATCHER = "dispatcher"
    QUERY = "query"
    CACHE = "cache"
    SEARCH = "search"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured file logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON string representation of the log entry.
        """
        log_entry: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        for field in ("event", "tool_name", "elapsed_ms", "query"):
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(
    debug: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 10485760,
) -> logging.Logger:
    """Setup hook logging.

    Args:
        debug: Emit debug lines on stderr.
        log_file: Optional log file path (always logs at DEBUG).
        log_format: File output format ("text" or "json").
        rotation_count: Number of backup files (default 3).
        max_bytes: Max file size before rotation (default 10MB).

    Returns:
        Configured package logger.
    """
    import logging.config

    config: dict = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "console": {"format": "[noodlbox-hook] %(message)s"},
            "json": {
                "()": JSONFormatter,
            },
        },
        "handlers": {
            "null": {"class": "logging.NullHandler"},
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["null"], "level": "DEBUG", "propagate": False}
        },
    }

    # stdout carries the hook decision, never log there
    if debug:
        config["handlers"]["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "level": "DEBUG",
            "stream": "ext://sys.stderr",
        }
        config["loggers"][LOGGER_NAME]["handlers"].append("console")

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json" if log_format == "json" else "detailed",
            "level": "DEBUG",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": rotation_count,
        }
        config["loggers"][LOGGER_NAME]["handlers"].append("file")

    logging.config.dictConfig(config)
    return logging.getLogger(LOGGER_NAME)


def get_logger() -> logging.Logger:
    """Get the package logger."""
    return logging.getLogger(LOGGER_NAME)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Get a logger for a specific component.

    Example:
        >>> logger = get_category_logger(LogCategory.CACHE)
        >>> logger.debug("Cache is stale")
    """
    return logging.getLogger(f"{LOGGER_NAME}.{category.value}")
