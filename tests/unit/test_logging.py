"""Tests for structured logging and statement instrumentation."""

import logging
import sys
from collections.abc import Generator
from datetime import date

import pytest

from sqlrecord import Querier, QuerierConfig
from sqlrecord._serialization import decode_json
from sqlrecord.dialects import postgresql_dialect, sqlite_dialect
from sqlrecord.utils.logging import (
    CorrelationIDFilter,
    StatementEvent,
    StructuredFormatter,
    get_correlation_id,
    get_logger,
    log_statement,
    log_with_context,
    set_correlation_id,
)
from tests.models import Person
from tests.stubs import StubConnection


@pytest.fixture
def correlation_id() -> Generator[str, None, None]:
    set_correlation_id("req-123")
    yield "req-123"
    set_correlation_id(None)


def _record(message: str = "hello", **attributes: object) -> logging.LogRecord:
    record = logging.LogRecord("sqlrecord.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in attributes.items():
        setattr(record, key, value)
    return record


def _statement_records(caplog: pytest.LogCaptureFixture) -> "list[logging.LogRecord]":
    return [r for r in caplog.records if hasattr(r, "statement")]


def test_get_logger_namespace() -> None:
    assert get_logger().name == "sqlrecord"
    assert get_logger("driver").name == "sqlrecord.driver"
    assert get_logger("sqlrecord.config").name == "sqlrecord.config"


def test_get_logger_adds_one_filter() -> None:
    logger = get_logger("test_filters")
    get_logger("test_filters")

    assert sum(isinstance(f, CorrelationIDFilter) for f in logger.filters) == 1


def test_correlation_id(correlation_id: str) -> None:
    assert get_correlation_id() == correlation_id

    record = _record()
    assert CorrelationIDFilter().filter(record) is True
    assert record.correlation_id == correlation_id  # type: ignore[attr-defined]


def test_statement_event_fields_skip_unset() -> None:
    event = StatementEvent(operation="exec", sql="DELETE FROM t", dialect="sqlite3", args=[date(2024, 1, 2), None])

    assert event.fields() == {
        "operation": "exec",
        "sql": "DELETE FROM t",
        "dialect": "sqlite3",
        "args": ["2024-01-02", None],
    }


def test_structured_formatter_promotes_statement_fields(correlation_id: str) -> None:
    event = StatementEvent(operation="query", sql="SELECT 1", dialect="postgresql", tag="reports", duration_ms=1.5)
    record = _record("statement", statement=event)
    CorrelationIDFilter().filter(record)

    entry = decode_json(StructuredFormatter().format(record))

    assert entry["message"] == "statement"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "sqlrecord.test"
    assert entry["correlation_id"] == correlation_id
    assert entry["operation"] == "query"
    assert entry["dialect"] == "postgresql"
    assert entry["tag"] == "reports"
    assert entry["duration_ms"] == 1.5
    assert "error_type" not in entry


def test_structured_formatter_extra_fields() -> None:
    entry = decode_json(StructuredFormatter().format(_record("plain", extra_fields={"rows_affected": 2})))

    assert entry["rows_affected"] == 2
    assert "correlation_id" not in entry
    assert "operation" not in entry


def test_structured_formatter_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("sqlrecord.test", logging.ERROR, __file__, 10, "failed", None, sys.exc_info())

    entry = decode_json(StructuredFormatter().format(record))

    assert "RuntimeError: boom" in entry["exception"]


def test_log_helpers_respect_level(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("test_context")
    event = StatementEvent(operation="exec", sql="DELETE FROM t", dialect="sqlite3")

    with caplog.at_level(logging.INFO, logger="sqlrecord"):
        log_with_context(logger, logging.DEBUG, "hidden", a=1)
        log_statement(logger, logging.DEBUG, "hidden", event)
        log_with_context(logger, logging.INFO, "shown", a=1)
        log_statement(logger, logging.INFO, "statement", event)

    assert [r.getMessage() for r in caplog.records] == ["shown", "statement"]
    assert caplog.records[0].extra_fields == {"a": 1}  # type: ignore[attr-defined]
    assert caplog.records[1].statement is event  # type: ignore[attr-defined]


def test_statements_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    conn = StubConnection()

    with caplog.at_level(logging.DEBUG, logger="sqlrecord"):
        Querier(conn, sqlite_dialect).delete(Person(id=1))

    records = _statement_records(caplog)
    assert len(records) == 1
    assert records[0].name == "sqlrecord.driver"
    assert records[0].getMessage() == 'exec: DELETE FROM "people" WHERE "id" = ?'
    event = records[0].statement  # type: ignore[attr-defined]
    assert event.operation == "exec"
    assert event.dialect == "sqlite3"
    assert event.tag is None
    assert event.args is None
    assert event.duration_ms is not None


def test_statement_tag_and_dialect_logged(caplog: pytest.LogCaptureFixture) -> None:
    conn = StubConnection()

    with caplog.at_level(logging.DEBUG, logger="sqlrecord"):
        Querier(conn, postgresql_dialect, tag="nightly job").delete(Person(id=1))

    assert conn.last.sql == '/* nightly job */ DELETE FROM "people" WHERE "id" = $1'
    entry = decode_json(StructuredFormatter().format(_statement_records(caplog)[0]))
    assert entry["tag"] == "nightly job"
    assert entry["dialect"] == "postgresql"
    assert entry["sql"] == 'DELETE FROM "people" WHERE "id" = $1'


def test_statement_arguments_logged_when_enabled(caplog: pytest.LogCaptureFixture) -> None:
    config = QuerierConfig(log_arguments=True)

    with caplog.at_level(logging.DEBUG, logger="sqlrecord"):
        Querier(StubConnection(), sqlite_dialect, config=config).delete(Person(id=1))

    assert _statement_records(caplog)[0].statement.args == [1]  # type: ignore[attr-defined]


def test_statement_logging_disabled(caplog: pytest.LogCaptureFixture) -> None:
    config = QuerierConfig(log_queries=False)

    with caplog.at_level(logging.DEBUG, logger="sqlrecord"):
        Querier(StubConnection(), sqlite_dialect, config=config).delete(Person(id=1))

    assert caplog.records == []


def test_slow_statements_logged_at_warning(caplog: pytest.LogCaptureFixture) -> None:
    config = QuerierConfig(log_queries=False, slow_query_threshold_ms=0)

    with caplog.at_level(logging.WARNING, logger="sqlrecord"):
        Querier(StubConnection(), sqlite_dialect, config=config).delete(Person(id=1))

    assert len(caplog.records) == 1
    assert caplog.records[0].levelno == logging.WARNING
    assert caplog.records[0].getMessage().startswith("slow exec: ")
    assert caplog.records[0].statement.duration_ms >= 0  # type: ignore[attr-defined]


def test_failed_statements_logged(caplog: pytest.LogCaptureFixture) -> None:
    class FailingConnection(StubConnection):
        def exec(self, sql: str, *args: object) -> None:  # type: ignore[override]
            raise RuntimeError("database is locked")

    with caplog.at_level(logging.DEBUG, logger="sqlrecord"), pytest.raises(RuntimeError, match="database is locked"):
        Querier(FailingConnection(), sqlite_dialect).delete(Person(id=1))

    assert caplog.records[0].getMessage() == "exec failed: database is locked"
    assert caplog.records[0].statement.error_type == "RuntimeError"  # type: ignore[attr-defined]
