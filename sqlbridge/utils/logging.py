"""Logging for sqlbridge.

All loggers live under the ``sqlbridge`` namespace. Query events carry a
fixed record shape, :data:`QUERY_FIELDS`, which :class:`StructuredFormatter`
writes as top-level JSON keys.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Final

from sqlbridge._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = ("QUERY_FIELDS", "StructuredFormatter", "configure_logging", "get_logger", "log_query")

ROOT_LOGGER_NAME: Final = "sqlbridge"
QUERY_FIELDS: Final = ("sql", "bindings_count", "time_ms", "host_error")


class StructuredFormatter(logging.Formatter):
    """JSON formatter that lifts query fields out of the record."""

    def format(self, record: LogRecord) -> str:
        """Format a log record as one JSON object.

        Args:
            record: The log record to format

        Returns:
            JSON formatted log entry
        """
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in QUERY_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return encode_json(log_entry)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the sqlbridge namespace.

    Args:
        name: Logger name. If not provided, returns the root sqlbridge logger.

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def configure_logging(level: str = "INFO", format_style: str = "structured") -> logging.Handler:
    """Send sqlbridge records to stderr.

    Replaces any handlers on the ``sqlbridge`` logger and stops propagation
    to the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_style: "structured" for JSON, "simple" for text

    Returns:
        The installed handler.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if format_style == "structured":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.propagate = False
    return handler


def log_query(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    sql: str,
    bindings_count: int | None = None,
    time_ms: float | None = None,
    host_error: str | None = None,
) -> None:
    """Log a query event with its structured fields.

    Fields left as ``None`` are not attached to the record.
    """
    if not logger.isEnabledFor(level):
        return
    fields = {"sql": sql, "bindings_count": bindings_count, "time_ms": time_ms, "host_error": host_error}
    logger.log(level, message, extra={key: value for key, value in fields.items() if value is not None}, stacklevel=2)
