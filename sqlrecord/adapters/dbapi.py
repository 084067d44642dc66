"""Connection primitive over any DB-API 2.0 (PEP 249) connection.

Statements are passed to ``cursor.execute`` as they are, so the querier's
dialect must match the driver's parameter style (``?`` for sqlite3,
``$n`` drivers for PostgreSQL, and so on).
"""

import contextlib
from collections.abc import Sequence
from typing import Any, Optional

__all__ = ("DBAPIConnection", "DBAPICursor", "DBAPIResult", "DBAPIRows")


class DBAPIResult:
    """Outcome of a statement that returns no rows.

    ``rows_affected`` is captured when the statement completes. The cursor's
    ``lastrowid`` is read only when ``last_insert_id`` is accessed.
    """

    __slots__ = ("_cursor", "rows_affected")

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self.rows_affected: int = cursor.rowcount

    @property
    def last_insert_id(self) -> Any:
        return getattr(self._cursor, "lastrowid", None)

    def __repr__(self) -> str:
        return f"DBAPIResult(rows_affected={self.rows_affected!r})"


class DBAPICursor:
    """Context manager for cursor acquisition and release."""

    __slots__ = ("connection", "cursor")

    def __init__(self, connection: Any) -> None:
        self.connection = connection
        self.cursor: Any = None

    def __enter__(self) -> Any:
        self.cursor = self.connection.cursor()
        return self.cursor

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.cursor is not None:
            if exc_type is None:
                self.cursor.close()
            else:
                with contextlib.suppress(Exception):
                    self.cursor.close()


class DBAPIRows:
    """Open result cursor returned by :meth:`DBAPIConnection.query`.

    Usable as a context manager; ``close`` is idempotent.
    """

    __slots__ = ("_closed", "_cursor")

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def description(self) -> Any:
        return self._cursor.description

    def fetchone(self) -> Optional[Sequence[Any]]:
        return self._cursor.fetchone()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cursor.close()

    def __enter__(self) -> "DBAPIRows":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is None:
            self.close()
        else:
            with contextlib.suppress(Exception):
                self.close()


class DBAPIConnection:
    """Adapts a DB-API connection (or a connection inside a transaction) to the querier.

    Driver exceptions are never translated.
    """

    __slots__ = ("_connection",)

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    @property
    def connection(self) -> Any:
        return self._connection

    def exec(self, sql: str, *args: Any) -> DBAPIResult:
        with DBAPICursor(self._connection) as cursor:
            cursor.execute(sql, args)
            return DBAPIResult(cursor)

    def query(self, sql: str, *args: Any) -> DBAPIRows:
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, args)
        except BaseException:
            with contextlib.suppress(Exception):
                cursor.close()
            raise
        return DBAPIRows(cursor)

    def query_row(self, sql: str, *args: Any) -> Optional[Sequence[Any]]:
        with DBAPICursor(self._connection) as cursor:
            cursor.execute(sql, args)
            return cursor.fetchone()
