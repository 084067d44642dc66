"""Type guard functions for the capability checks done by the querier.

Records opt into hooks by implementing a method; these helpers check for
them once per operation instead of relying on a common base class.
"""

from typing import TYPE_CHECKING, Any

from sqlrecord.protocols import AfterFinder, BeforeInserter, BeforeUpdater, Record, Table

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

__all__ = ("has_after_find", "has_before_insert", "has_before_update", "is_record", "is_table")


def is_record(obj: Any) -> "TypeGuard[Record]":
    """Check if a struct is a record with a single-column primary key.

    Args:
        obj: The object to check

    Returns:
        True if the object implements the Record protocol, False otherwise
    """
    return isinstance(obj, Record)


def is_table(obj: Any) -> "TypeGuard[Table]":
    """Check if a view is a table with a single-column primary key.

    Args:
        obj: The object to check

    Returns:
        True if the object implements the Table protocol, False otherwise
    """
    return isinstance(obj, Table)


def has_before_insert(obj: Any) -> "TypeGuard[BeforeInserter]":
    return isinstance(obj, BeforeInserter)


def has_before_update(obj: Any) -> "TypeGuard[BeforeUpdater]":
    return isinstance(obj, BeforeUpdater)


def has_after_find(obj: Any) -> "TypeGuard[AfterFinder]":
    return isinstance(obj, AfterFinder)
