"""Column and value filtering for column-subset inserts and updates."""

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from sqlrecord.exceptions import ColumnValidationError

if TYPE_CHECKING:
    from sqlrecord.protocols import Record, Struct, View

__all__ = (
    "filtered_column_indexes",
    "filtered_columns_and_values",
    "filtered_struct_columns_and_values",
    "without_index",
)

_T = TypeVar("_T")

COLUMN_MARKER = "$"


def without_index(items: "Sequence[_T]", index: int) -> "list[_T]":
    """Return a new list of ``items`` without the element at ``index``."""
    return [item for i, item in enumerate(items) if i != index]


def filtered_column_indexes(
    view: "View", columns_in: "Iterable[str]", pk_index: Optional[int] = None
) -> "list[int]":
    """Resolve requested column names to table-ordered column indexes.

    Each requested name may be a field or a column name, optionally prefixed
    with ``$``. Duplicates collapse to one entry.

    Args:
        view: View whose columns are filtered.
        columns_in: Requested field or column names.
        pk_index: Index of a column that must not be requested (the primary
            key of an update), or None.

    Raises:
        ColumnValidationError: if the primary key column is requested, or if
            any name matches no column. The error lists every unmatched name.

    Returns:
        Indexes into ``view.columns()`` in table order.
    """
    requested = {view.to_col(c.lstrip(COLUMN_MARKER)) for c in columns_in}

    indexes: list[int] = []
    for i, column in enumerate(view.columns()):
        if column not in requested:
            continue
        if i == pk_index:
            msg = f"will not update PK column: {column}"
            raise ColumnValidationError(msg, (column,))
        requested.discard(column)
        indexes.append(i)

    if requested:
        unexpected = sorted(requested)
        msg = f"unexpected columns: {', '.join(unexpected)}"
        raise ColumnValidationError(msg, unexpected)

    return indexes


def _pick(items: "Sequence[Any]", indexes: "Sequence[int]") -> "list[Any]":
    return [items[i] for i in indexes]


def filtered_columns_and_values(
    record: "Record", columns_in: "Iterable[str]", is_update: bool
) -> "tuple[list[str], list[Any]]":
    """Filter a record's columns and values to the requested subset.

    For updates the primary key column may not be requested.
    """
    table = record.table()
    indexes = filtered_column_indexes(table, columns_in, table.pk_column_index() if is_update else None)
    return _pick(table.columns(), indexes), _pick(record.values(), indexes)


def filtered_struct_columns_and_values(
    struct: "Struct", columns_in: "Iterable[str]"
) -> "tuple[list[str], list[Any]]":
    """Filter a struct's columns and values to the requested subset."""
    view = struct.view()
    indexes = filtered_column_indexes(view, columns_in)
    return _pick(view.columns(), indexes), _pick(struct.values(), indexes)
