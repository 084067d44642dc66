"""Dialect for Microsoft SQL Server through drivers using ``@pN`` placeholders."""

from sqlrecord.dialects.base import Dialect, LastInsertIdMethod, SelectLimitMethod

__all__ = ("SQLServerDialect", "dialect")


class SQLServerDialect(Dialect):
    __slots__ = ()

    name = "sqlserver"
    sqlglot_dialect = "tsql"

    def placeholder(self, index: int) -> str:
        return f"@p{index}"

    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.OUTPUT_INSERTED

    def select_limit_method(self) -> SelectLimitMethod:
        return SelectLimitMethod.SELECT_TOP


dialect = SQLServerDialect()
