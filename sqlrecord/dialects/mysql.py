"""Dialect for MySQL and MariaDB."""

from sqlrecord.dialects.base import DefaultValuesMethod, Dialect, LastInsertIdMethod, SelectLimitMethod

__all__ = ("MySQLDialect", "dialect")


class MySQLDialect(Dialect):
    __slots__ = ()

    name = "mysql"
    sqlglot_dialect = "mysql"

    def placeholder(self, index: int) -> str:
        return "?"

    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.LAST_INSERT_ID

    def select_limit_method(self) -> SelectLimitMethod:
        return SelectLimitMethod.LIMIT

    def default_values_method(self) -> DefaultValuesMethod:
        return DefaultValuesMethod.EMPTY_LISTS


dialect = MySQLDialect()
