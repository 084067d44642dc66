"""Dialect for SQLite3."""

from sqlrecord.dialects.base import Dialect, LastInsertIdMethod, SelectLimitMethod

__all__ = ("SQLite3Dialect", "dialect")


class SQLite3Dialect(Dialect):
    __slots__ = ()

    name = "sqlite3"
    sqlglot_dialect = "sqlite"

    def placeholder(self, index: int) -> str:
        return "?"

    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.LAST_INSERT_ID

    def select_limit_method(self) -> SelectLimitMethod:
        return SelectLimitMethod.LIMIT


dialect = SQLite3Dialect()
