"""Statement logging for the querier.

Every statement goes through one of the three wrappers below, which prefix
the querier tag comment, hand the statement to the connection and log it as a
:class:`~sqlrecord.utils.logging.StatementEvent` with its duration.
"""

import logging
import time
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Optional

from mypy_extensions import trait

from sqlrecord.utils.logging import StatementEvent, get_logger, log_statement

if TYPE_CHECKING:
    from sqlrecord.config import QuerierConfig
    from sqlrecord.dialects.base import Dialect
    from sqlrecord.protocols import Connection, ExecResult, Rows
    from sqlrecord.typing import RowValues

__all__ = ("InstrumentationMixin",)

logger = get_logger("driver")


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


@trait
class InstrumentationMixin:
    """Logs and times statements sent to the connection."""

    __slots__ = ()

    _config: "QuerierConfig"
    _connection: "Connection"
    _dialect: "Dialect"
    _tag: Optional[str]

    def _tagged(self, sql: str) -> str:
        if self._tag:
            return f"/* {self._tag} */ {sql}"
        return sql

    @contextmanager
    def _instrument(self, operation: str, sql: str, args: "Sequence[Any]") -> "Generator[None, None, None]":
        config = self._config
        if not config.log_queries and config.slow_query_threshold_ms is None:
            yield
            return

        event = StatementEvent(
            operation=operation,
            sql=sql,
            dialect=self._dialect.name,
            tag=self._tag,
            args=list(args) if config.log_arguments else None,
        )
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            if config.log_queries:
                failed = replace(event, duration_ms=_elapsed_ms(start), error_type=type(e).__name__)
                log_statement(logger, logging.DEBUG, f"{operation} failed: {e}", failed)
            raise

        duration_ms = _elapsed_ms(start)
        event = replace(event, duration_ms=duration_ms)
        threshold = config.slow_query_threshold_ms
        if threshold is not None and duration_ms >= threshold:
            log_statement(logger, logging.WARNING, f"slow {operation}: {duration_ms:.1f} ms", event)
        elif config.log_queries:
            log_statement(logger, logging.DEBUG, f"{operation}: {sql}", event)

    def _exec(self, sql: str, args: "Sequence[Any]" = ()) -> "ExecResult":
        with self._instrument("exec", sql, args):
            return self._connection.exec(self._tagged(sql), *args)

    def _query(self, sql: str, args: "Sequence[Any]" = ()) -> "Rows":
        with self._instrument("query", sql, args):
            return self._connection.query(self._tagged(sql), *args)

    def _query_row(self, sql: str, args: "Sequence[Any]" = ()) -> "Optional[RowValues]":
        with self._instrument("query_row", sql, args):
            return self._connection.query_row(self._tagged(sql), *args)
