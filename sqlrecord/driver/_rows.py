"""Row materialization and hook invocation."""

from typing import TYPE_CHECKING, Any

from sqlrecord.exceptions import NotFoundError, ScanError
from sqlrecord.utils.type_guards import has_after_find, has_before_insert, has_before_update

if TYPE_CHECKING:
    from sqlrecord.protocols import Rows, Struct
    from sqlrecord.typing import RowValues

__all__ = ("fetch_row", "next_row", "run_after_find", "run_before_insert", "run_before_update", "scan_row")


def run_before_insert(struct: Any) -> None:
    if has_before_insert(struct):
        struct.before_insert()


def run_before_update(struct: Any) -> None:
    if has_before_update(struct):
        struct.before_update()


def run_after_find(struct: Any) -> None:
    if has_after_find(struct):
        struct.after_find()


def scan_row(struct: "Struct", row: "RowValues") -> None:
    """Store one raw row into the struct's pointers, in column order."""
    pointers = struct.pointers()
    if len(row) != len(pointers):
        msg = f"expected {len(pointers)} destination columns for {struct.view().name}, got {len(row)}"
        raise ScanError(msg)
    for pointer, value in zip(pointers, row):
        pointer.set(value)


def fetch_row(struct: "Struct", rows: "Rows") -> bool:
    """Scan the next result row from ``rows`` into ``struct``.

    If ``struct`` has an ``after_find`` hook it runs after the scan; the
    struct stays populated even when the hook fails. Closing ``rows`` is the
    caller's responsibility.

    Returns:
        ``False`` once ``rows`` is exhausted, leaving ``struct`` untouched.
        Errors raised by the cursor or the hook propagate unchanged.
    """
    row = rows.fetchone()
    if row is None:
        return False
    scan_row(struct, row)
    run_after_find(struct)
    return True


def next_row(struct: "Struct", rows: "Rows") -> None:
    """Like :func:`fetch_row`, raising :class:`NotFoundError` when ``rows`` is exhausted."""
    if not fetch_row(struct, rows):
        raise NotFoundError
