"""sqlrecord: typed records in, dialect-correct CRUD SQL out."""

from sqlrecord import adapters, core, dialects, driver, exceptions, utils
from sqlrecord.__metadata__ import __version__
from sqlrecord.adapters import DBAPIConnection
from sqlrecord.base import RecordMixin, StructMixin, StructView, TableView, ViewBase, table, table_of, view, view_of
from sqlrecord.config import QuerierConfig, load_config_from_env
from sqlrecord.dialects import Dialect, DialectName, LastInsertIdMethod, SelectLimitMethod, get_dialect
from sqlrecord.driver import Querier
from sqlrecord.exceptions import (
    ColumnValidationError,
    InconsistentPrimaryKeyError,
    MissingPrimaryKeyError,
    MixedTablesError,
    MultipleRowsAffectedError,
    NothingToUpdateError,
    NotFoundError,
    PartialResultError,
    SQLRecordError,
)
from sqlrecord.parse import FieldInfo, StructInfo, column_field, parse_dataclass
from sqlrecord.protocols import AfterFinder, BeforeInserter, BeforeUpdater, Connection, Record, Struct, Table, View

__all__ = (
    "AfterFinder",
    "BeforeInserter",
    "BeforeUpdater",
    "ColumnValidationError",
    "Connection",
    "DBAPIConnection",
    "Dialect",
    "DialectName",
    "FieldInfo",
    "InconsistentPrimaryKeyError",
    "LastInsertIdMethod",
    "MissingPrimaryKeyError",
    "MixedTablesError",
    "MultipleRowsAffectedError",
    "NotFoundError",
    "NothingToUpdateError",
    "PartialResultError",
    "Querier",
    "QuerierConfig",
    "Record",
    "RecordMixin",
    "SQLRecordError",
    "SelectLimitMethod",
    "Struct",
    "StructInfo",
    "StructMixin",
    "StructView",
    "Table",
    "TableView",
    "View",
    "ViewBase",
    "__version__",
    "adapters",
    "column_field",
    "core",
    "dialects",
    "driver",
    "exceptions",
    "get_dialect",
    "load_config_from_env",
    "parse_dataclass",
    "table",
    "table_of",
    "utils",
    "view",
    "view_of",
)
