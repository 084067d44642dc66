"""SQL dialects supported by the querier."""

from enum import Enum
from types import MappingProxyType
from typing import Union

from sqlrecord.dialects.base import DefaultValuesMethod, Dialect, LastInsertIdMethod, SelectLimitMethod
from sqlrecord.dialects.mssql import dialect as mssql_dialect
from sqlrecord.dialects.mysql import dialect as mysql_dialect
from sqlrecord.dialects.postgresql import dialect as postgresql_dialect
from sqlrecord.dialects.sqlite import dialect as sqlite_dialect
from sqlrecord.dialects.sqlserver import dialect as sqlserver_dialect
from sqlrecord.exceptions import ImproperConfigurationError

__all__ = (
    "DefaultValuesMethod",
    "Dialect",
    "DialectName",
    "LastInsertIdMethod",
    "SelectLimitMethod",
    "get_dialect",
    "mssql_dialect",
    "mysql_dialect",
    "postgresql_dialect",
    "sqlite_dialect",
    "sqlserver_dialect",
)


class DialectName(str, Enum):
    """Supported dialects."""

    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE3 = "sqlite3"
    MSSQL = "mssql"
    SQLSERVER = "sqlserver"

    def __str__(self) -> str:
        return self.value

    @property
    def dialect(self) -> Dialect:
        return _DIALECTS[self]


_DIALECTS = MappingProxyType(
    {
        DialectName.POSTGRESQL: postgresql_dialect,
        DialectName.MYSQL: mysql_dialect,
        DialectName.SQLITE3: sqlite_dialect,
        DialectName.MSSQL: mssql_dialect,
        DialectName.SQLSERVER: sqlserver_dialect,
    }
)

_ALIASES = MappingProxyType(
    {"postgres": DialectName.POSTGRESQL, "sqlite": DialectName.SQLITE3, "tsql": DialectName.MSSQL}
)


def get_dialect(name: Union[str, DialectName, Dialect]) -> Dialect:
    """Resolve a dialect name (or alias) to its dialect.

    Raises:
        ImproperConfigurationError: if the name is unknown.
    """
    if isinstance(name, Dialect):
        return name
    if isinstance(name, DialectName):
        return name.dialect
    key = name.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key].dialect
    try:
        return DialectName(key).dialect
    except ValueError:
        known = ", ".join(sorted([*(d.value for d in DialectName), *_ALIASES]))
        msg = f"Unknown dialect {name!r}; expected one of: {known}"
        raise ImproperConfigurationError(msg) from None
