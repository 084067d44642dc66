"""SELECT operations of the querier: selectors take raw tails, finders build them."""

import contextlib
from typing import TYPE_CHECKING, Any

from mypy_extensions import trait

from sqlrecord.core.builder import expand_tail, find_all_tail, find_tail, select_query
from sqlrecord.driver._instrumentation import InstrumentationMixin
from sqlrecord.driver._rows import fetch_row, next_row, run_after_find, scan_row
from sqlrecord.exceptions import MissingPrimaryKeyError, NotFoundError, PartialResultError

if TYPE_CHECKING:
    from sqlrecord.dialects.base import Dialect
    from sqlrecord.protocols import Record, Rows, Struct, Table, View

__all__ = ("SelectsMixin",)


@trait
class SelectsMixin(InstrumentationMixin):
    """Queries materializing rows into structs and records."""

    __slots__ = ()

    _dialect: "Dialect"

    def next_row(self, struct: "Struct", rows: "Rows") -> None:
        """Scan the next row of ``rows`` into ``struct`` and run its ``after_find`` hook.

        Closing ``rows`` is the caller's responsibility.

        Raises:
            NotFoundError: if there is no next row.
        """
        next_row(struct, rows)

    def select_one_to(self, struct: "Struct", tail: str, *args: Any) -> None:
        """Query the struct's view with ``tail`` and scan the first row into ``struct``.

        With a LIMIT dialect, ``tail`` should end with ``LIMIT 1``.

        Raises:
            NotFoundError: if there are no rows.
        """
        view = struct.view()
        sql = select_query(self._dialect, view, expand_tail(view, tail), limit1=True)
        row = self._query_row(sql, args)
        if row is None:
            raise NotFoundError
        scan_row(struct, row)
        run_after_find(struct)

    def select_one_from(self, view: "View", tail: str, *args: Any) -> "Struct":
        """Query ``view`` with ``tail`` and scan the first row into a new struct."""
        struct = view.new_struct()
        self.select_one_to(struct, tail, *args)
        return struct

    def select_rows(self, view: "View", tail: str, *args: Any) -> "Rows":
        """Query ``view`` with ``tail`` and return the open cursor.

        Iterate it with :meth:`next_row`; the caller must close it.
        """
        sql = select_query(self._dialect, view, expand_tail(view, tail), limit1=False)
        return self._query(sql, args)

    def select_all_from(self, view: "View", tail: str, *args: Any) -> "list[Struct]":
        """Query ``view`` with ``tail`` and return a new struct per row.

        No rows is an empty list, never :class:`NotFoundError`.

        Raises:
            PartialResultError: if iteration fails part way; its ``results``
                hold the structs scanned so far and the failure is chained as
                ``__cause__``.
        """
        rows = self.select_rows(view, tail, *args)
        structs: list[Struct] = []
        try:
            while True:
                struct = view.new_struct()
                try:
                    if not fetch_row(struct, rows):
                        break
                except Exception as e:
                    raise PartialResultError(structs) from e
                structs.append(struct)
        except BaseException:
            # the iteration error wins over a close error
            with contextlib.suppress(Exception):
                rows.close()
            raise
        rows.close()
        return structs

    def find_one_to(self, struct: "Struct", column: str, arg: Any) -> None:
        """Query the struct's view for ``column`` equal to ``arg`` (``IS NULL`` for None).

        Raises:
            NotFoundError: if there are no rows.
        """
        view = struct.view()
        tail, need_arg = find_tail(self._dialect, view.name, view.to_col(column), arg, limit1=True)
        if need_arg:
            self.select_one_to(struct, tail, arg)
        else:
            self.select_one_to(struct, tail)

    def find_one_from(self, view: "View", column: str, arg: Any) -> "Struct":
        """Like :meth:`find_one_to`, scanning into a new struct."""
        struct = view.new_struct()
        self.find_one_to(struct, column, arg)
        return struct

    def find_rows(self, view: "View", column: str, arg: Any) -> "Rows":
        """Query ``view`` for ``column`` equal to ``arg`` and return the open cursor."""
        tail, need_arg = find_tail(self._dialect, view.name, view.to_col(column), arg, limit1=False)
        if need_arg:
            return self.select_rows(view, tail, arg)
        return self.select_rows(view, tail)

    def find_all_from(self, view: "View", column: str, *args: Any) -> "list[Struct]":
        """Query ``view`` for ``column`` matching any of ``args``.

        No values issue no query and return an empty list.
        """
        if not args:
            return []
        tail = find_all_tail(self._dialect, view, view.to_col(column), len(args))
        return self.select_all_from(view, tail, *args)

    def find_all_from_pk(self, table: "Table", *args: Any) -> "list[Struct]":
        """Query ``table`` for rows with any of the primary keys in ``args``.

        Raises:
            MissingPrimaryKeyError: if no primary keys are given.
        """
        if not args:
            raise MissingPrimaryKeyError
        tail = find_all_tail(self._dialect, table, table.pk(), len(args))
        return self.select_all_from(table, tail, *args)

    def find_by_primary_key_to(self, record: "Record", pk: Any) -> None:
        """Query the record's table by primary key and scan the row into ``record``."""
        self.find_one_to(record, record.table().pk(), pk)

    def find_by_primary_key_from(self, table: "Table", pk: Any) -> "Record":
        """Query ``table`` by primary key and scan the row into a new record."""
        record = table.new_record()
        self.find_one_to(record, table.pk(), pk)
        return record

    def reload(self, record: "Record") -> None:
        """Re-read the record's row by its own primary key, overwriting its fields.

        Raises:
            MissingPrimaryKeyError: if the record has no primary key.
            NotFoundError: if the row no longer exists.
        """
        if not record.has_pk():
            raise MissingPrimaryKeyError
        self.find_by_primary_key_to(record, record.pk_value())
