"""Runtime-checkable protocols describing mapped types and the connection.

The querier never relies on concrete classes: views, tables, structs and
records are anything that satisfies these protocols, and optional hooks are
detected per instance with ``isinstance`` checks against the hook protocols.
"""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlglot import exp

    from sqlrecord.typing import RowValues

__all__ = (
    "AfterFinder",
    "BeforeInserter",
    "BeforeUpdater",
    "Connection",
    "ExecResult",
    "Pointer",
    "Record",
    "Rows",
    "Struct",
    "Table",
    "View",
)


@runtime_checkable
class Pointer(Protocol):
    """Addressable slot of a single struct field."""

    def get(self) -> Any:
        """Return the current field value."""
        ...

    def set(self, value: Any) -> None:
        """Store a value into the field."""
        ...


@runtime_checkable
class View(Protocol):
    """SQL database view or table."""

    @property
    def schema(self) -> str:
        """Schema name in SQL database, empty for the default schema."""
        ...

    @property
    def name(self) -> str:
        """View or table name in SQL database."""
        ...

    def columns(self) -> "list[str]":
        """Return a new list of column names in field order."""
        ...

    def new_struct(self) -> "Struct":
        """Make a new zero-valued struct for this view."""
        ...

    def has_col(self, field: str) -> Optional[str]:
        """Return the column for a field or column name, None if unknown."""
        ...

    def to_col(self, field: str) -> str:
        """Return the column for a field or column name, the input if unknown."""
        ...

    def fields(self) -> "list[str]":
        """Return field names in column order."""
        ...

    def icolumns(self) -> "tuple[exp.Column, ...]":
        """Return opaque per-column identifiers for projection lists."""
        ...


@runtime_checkable
class Table(View, Protocol):
    """SQL database table with single-column primary key."""

    def new_record(self) -> "Record":
        """Make a new zero-valued record for this table."""
        ...

    def pk_column_index(self) -> int:
        """Return index of the primary key column."""
        ...

    def pk(self) -> str:
        """Return the primary key column name."""
        ...


@runtime_checkable
class Struct(Protocol):
    """Row in SQL database view or table."""

    def __str__(self) -> str: ...

    def values(self) -> "list[Any]":
        """Return field values in column order."""
        ...

    def pointers(self) -> "list[Pointer]":
        """Return field pointers in column order."""
        ...

    def view(self) -> View:
        """Return the View object for this struct."""
        ...


@runtime_checkable
class Record(Struct, Protocol):
    """Row in SQL database table with single-column primary key."""

    def table(self) -> Table:
        """Return the Table object for this record."""
        ...

    def pk_value(self) -> Any:
        """Return the primary key value."""
        ...

    def pk_pointer(self) -> Pointer:
        """Return the pointer to the primary key field."""
        ...

    def has_pk(self) -> bool:
        """Return True if the record has a non-zero primary key set."""
        ...

    def set_pk(self, pk: Any) -> None:
        """Set the record primary key."""
        ...


@runtime_checkable
class BeforeInserter(Protocol):
    """Optional hook run by inserts; raising aborts the operation."""

    def before_insert(self) -> None: ...


@runtime_checkable
class BeforeUpdater(Protocol):
    """Optional hook run by updates; raising aborts the operation."""

    def before_update(self) -> None: ...


@runtime_checkable
class AfterFinder(Protocol):
    """Optional hook run after a row was scanned by finders and selectors."""

    def after_find(self) -> None: ...


@runtime_checkable
class ExecResult(Protocol):
    """Outcome of a statement that returns no rows."""

    @property
    def rows_affected(self) -> int:
        """Number of affected rows, negative when the driver cannot tell."""
        ...

    @property
    def last_insert_id(self) -> Any:
        """Identity generated by the last insert, None when not reported."""
        ...


@runtime_checkable
class Rows(Protocol):
    """Open result cursor; the caller owns it and must close it."""

    def fetchone(self) -> "Optional[RowValues]":
        """Advance the cursor, returning None once exhausted."""
        ...

    def close(self) -> None: ...


@runtime_checkable
class Connection(Protocol):
    """Database connection or transaction the querier runs statements on."""

    def exec(self, sql: str, *args: Any) -> ExecResult:
        """Execute a statement without returning rows."""
        ...

    def query(self, sql: str, *args: Any) -> Rows:
        """Execute a statement returning rows."""
        ...

    def query_row(self, sql: str, *args: Any) -> "Optional[RowValues]":
        """Execute a statement expected to return at most one row."""
        ...
