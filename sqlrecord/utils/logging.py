"""Logging for sqlrecord.

Loggers handed out by :func:`get_logger` live under the ``sqlrecord``
namespace and stamp each record with the current correlation ID. Statements
issued by the querier are logged with a :class:`StatementEvent` attached;
:class:`StructuredFormatter` renders its fields as top-level JSON keys, so
entries can be filtered by operation, dialect or querier tag.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import msgspec

from sqlrecord._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = (
    "CorrelationIDFilter",
    "StatementEvent",
    "StructuredFormatter",
    "correlation_id_var",
    "get_correlation_id",
    "get_logger",
    "log_statement",
    "log_with_context",
    "set_correlation_id",
)

correlation_id_var: ContextVar[str | None] = ContextVar("sqlrecord_correlation_id", default=None)


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation ID for the current context, or clear it with None."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> str | None:
    return correlation_id_var.get()


@dataclass(frozen=True)
class StatementEvent:
    """One statement handed to the connection.

    ``sql`` is the statement as built, without the querier tag comment; the
    tag is reported separately. ``args`` is only set when argument logging is
    enabled.
    """

    operation: str
    sql: str
    dialect: str
    tag: Optional[str] = None
    args: Optional[list[Any]] = None
    duration_ms: Optional[float] = None
    error_type: Optional[str] = None

    def fields(self) -> dict[str, Any]:
        """Return the set fields, leaving out those that are None."""
        return {k: v for k, v in msgspec.to_builtins(self, enc_hook=str).items() if v is not None}


class StructuredFormatter(logging.Formatter):
    """Render records as one JSON object per line.

    Statement fields come first-class, followed by any ``extra_fields``
    passed to :func:`log_with_context`.
    """

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is not None:
            entry["correlation_id"] = correlation_id

        event = getattr(record, "statement", None)
        if isinstance(event, StatementEvent):
            entry.update(event.fields())
        entry.update(getattr(record, "extra_fields", None) or {})

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return encode_json(entry)


class CorrelationIDFilter(logging.Filter):
    """Copy the context's correlation ID onto each record."""

    def filter(self, record: LogRecord) -> bool:
        if correlation_id := get_correlation_id():
            record.correlation_id = correlation_id  # type: ignore[attr-defined]
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``sqlrecord`` namespace.

    Args:
        name: Logger name, prefixed with ``sqlrecord.`` unless it already is.
            The ``sqlrecord`` logger itself is returned when omitted.

    Returns:
        The logger, with a :class:`CorrelationIDFilter` attached once.
    """
    if name is None:
        return logging.getLogger("sqlrecord")
    if not name.startswith("sqlrecord"):
        name = f"sqlrecord.{name}"

    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIDFilter) for f in logger.filters):
        logger.addFilter(CorrelationIDFilter())
    return logger


def log_statement(logger: logging.Logger, level: int, message: str, event: StatementEvent) -> None:
    """Log ``message`` with ``event`` attached as the record's ``statement``."""
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"statement": event})


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log ``message`` with ``extra_fields`` attached for the structured formatter."""
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"extra_fields": extra_fields})
