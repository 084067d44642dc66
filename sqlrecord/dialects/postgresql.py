"""Dialect for PostgreSQL."""

from sqlrecord.dialects.base import Dialect, LastInsertIdMethod, SelectLimitMethod

__all__ = ("PostgreSQLDialect", "dialect")


class PostgreSQLDialect(Dialect):
    __slots__ = ()

    name = "postgresql"
    sqlglot_dialect = "postgres"

    def placeholder(self, index: int) -> str:
        return f"${index}"

    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.RETURNING

    def select_limit_method(self) -> SelectLimitMethod:
        return SelectLimitMethod.LIMIT


dialect = PostgreSQLDialect()
