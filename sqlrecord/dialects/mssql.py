"""Dialect for Microsoft SQL Server through ODBC-style drivers using ``?`` placeholders."""

from sqlrecord.dialects.base import Dialect, LastInsertIdMethod, SelectLimitMethod

__all__ = ("MSSQLDialect", "dialect")


class MSSQLDialect(Dialect):
    __slots__ = ()

    name = "mssql"
    sqlglot_dialect = "tsql"

    def placeholder(self, index: int) -> str:
        return "?"

    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.OUTPUT_INSERTED

    def select_limit_method(self) -> SelectLimitMethod:
        return SelectLimitMethod.SELECT_TOP


dialect = MSSQLDialect()
