from collections.abc import Iterable, Sequence
from typing import Any, Optional

__all__ = (
    "ColumnValidationError",
    "ImproperConfigurationError",
    "InconsistentPrimaryKeyError",
    "MissingPrimaryKeyError",
    "MixedTablesError",
    "MultipleRowsAffectedError",
    "NotFoundError",
    "NothingToUpdateError",
    "PartialResultError",
    "SQLRecordError",
    "ScanError",
    "StructDefinitionError",
    "UnhandledDialectError",
)


class SQLRecordError(Exception):
    """Base exception class from which all sqlrecord exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLRecordError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(SQLRecordError):
    """Improper configuration error.

    Raised for an unknown dialect name or an invalid configuration value.
    """


class StructDefinitionError(SQLRecordError):
    """A record class cannot be mapped to a view or table."""


class UnhandledDialectError(SQLRecordError):
    """A dialect reported a method the querier does not know how to handle."""


class NotFoundError(SQLRecordError):
    """Query produced no rows, or no row was affected by a change by primary key."""

    detail = "no rows in result set"


class MissingPrimaryKeyError(SQLRecordError):
    """Primary key is required and not set."""

    detail = "no primary key"


class ColumnValidationError(SQLRecordError):
    """Caller-supplied columns do not fit the table."""

    columns: "tuple[str, ...]"

    def __init__(self, message: str, columns: "Iterable[str]" = ()) -> None:
        super().__init__(detail=message)
        self.columns = tuple(columns)


class NothingToUpdateError(ColumnValidationError):
    """Column filtering left nothing to update."""

    def __init__(self, message: str = "nothing to update") -> None:
        super().__init__(message)


class MixedTablesError(ColumnValidationError):
    """Batched insert input spans more than one view or table."""


class InconsistentPrimaryKeyError(ColumnValidationError):
    """Batched insert input mixes records with and without primary key."""


class MultipleRowsAffectedError(SQLRecordError):
    """A change by primary key affected more than one row.

    The primary key is assumed to be unique; this is never an expected outcome.
    """

    rows_affected: int
    statement: Optional[str]

    def __init__(self, rows_affected: int, operation: str, statement: Optional[str] = None) -> None:
        detail_message = f"{rows_affected} rows by {operation} by primary key"
        if statement:
            detail_message = f"{detail_message}\nSQL: {statement}"
        super().__init__(detail=detail_message)
        self.rows_affected = rows_affected
        self.statement = statement


class ScanError(SQLRecordError):
    """A result row does not fit the destination struct."""


class PartialResultError(SQLRecordError):
    """Iteration over a multi-row result failed part way.

    ``results`` holds every struct materialized before the failure; the
    original error is available as ``__cause__``.
    """

    results: "list[Any]"

    def __init__(self, results: "Sequence[Any]", message: Optional[str] = None) -> None:
        super().__init__(detail=message or f"result iteration failed after {len(results)} rows")
        self.results = list(results)
