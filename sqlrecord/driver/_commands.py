"""INSERT, UPDATE and DELETE operations of the querier."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from mypy_extensions import trait

from sqlrecord.core.builder import (
    delete_from_query,
    delete_query,
    expand_tail,
    insert_multi_query,
    insert_query,
    update_query,
)
from sqlrecord.core.columns import filtered_columns_and_values, filtered_struct_columns_and_values, without_index
from sqlrecord.dialects.base import LastInsertIdMethod
from sqlrecord.driver._instrumentation import InstrumentationMixin
from sqlrecord.driver._rows import run_before_insert, run_before_update
from sqlrecord.exceptions import (
    ColumnValidationError,
    InconsistentPrimaryKeyError,
    MissingPrimaryKeyError,
    MixedTablesError,
    MultipleRowsAffectedError,
    NothingToUpdateError,
    NotFoundError,
    ScanError,
    SQLRecordError,
    UnhandledDialectError,
)
from sqlrecord.utils.logging import get_logger, log_with_context
from sqlrecord.utils.type_guards import is_record

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlrecord.dialects.base import Dialect
    from sqlrecord.protocols import ExecResult, Record, Struct, View

__all__ = ("CommandsMixin",)

logger = get_logger("driver")


def _rows_affected(result: "ExecResult", operation: str) -> int:
    rows_affected = result.rows_affected
    if rows_affected is None or rows_affected < 0:
        msg = f"driver did not report affected rows for {operation}"
        raise SQLRecordError(msg)
    return rows_affected


@trait
class CommandsMixin(InstrumentationMixin):
    """Statements changing data, one row (or one batch) per call."""

    __slots__ = ()

    _dialect: "Dialect"

    def _expect_one_row(self, result: "ExecResult", operation: str, sql: str) -> None:
        rows_affected = _rows_affected(result, operation)
        if rows_affected == 0:
            raise NotFoundError
        if rows_affected > 1:
            log_with_context(
                logger,
                logging.ERROR,
                f"{rows_affected} rows affected by {operation} by primary key",
                operation=operation,
                rows_affected=rows_affected,
                sql=sql,
            )
            raise MultipleRowsAffectedError(rows_affected, operation, sql)

    def _insert(self, struct: "Struct", columns: "Sequence[str]", values: "Sequence[Any]") -> None:
        record: Optional[Record] = struct if is_record(struct) else None
        # a key set by the caller is kept as it is
        fetch_pk = record is not None and not record.has_pk()
        pk_column = record.table().pk() if record is not None and fetch_pk else None

        statement = insert_query(self._dialect, struct.view(), columns, values, pk_column)
        method = self._dialect.last_insert_id_method()

        if method is LastInsertIdMethod.LAST_INSERT_ID:
            result = self._exec(statement.sql, statement.args)
            if record is not None and fetch_pk:
                last_insert_id = result.last_insert_id
                if last_insert_id is None:
                    msg = f"driver did not report last insert id for {struct.view().name}"
                    raise SQLRecordError(msg)
                record.set_pk(last_insert_id)
            return

        if method in (LastInsertIdMethod.RETURNING, LastInsertIdMethod.OUTPUT_INSERTED):
            if record is None or pk_column is None:
                self._exec(statement.sql, statement.args)
                return
            row = self._query_row(statement.sql, statement.args)
            if row is None:
                raise NotFoundError
            if len(row) != 1:
                msg = f"expected the generated primary key only, got {len(row)} columns"
                raise ScanError(msg)
            record.pk_pointer().set(row[0])
            return

        msg = f"unhandled last insert id method {method!r}; please report this bug"
        raise UnhandledDialectError(msg)

    def insert(self, struct: "Struct") -> None:
        """Insert a struct into its view or table.

        Runs the ``before_insert`` hook first. A record without primary key
        gets the generated key stored into it; a record with primary key set
        keeps it.
        """
        run_before_insert(struct)

        columns = struct.view().columns()
        values = struct.values()
        if is_record(struct) and not struct.has_pk():
            pk = struct.table().pk_column_index()
            columns = without_index(columns, pk)
            values = without_index(values, pk)

        self._insert(struct, columns, values)

    def insert_columns(self, struct: "Struct", *columns: str) -> None:
        """Insert a struct with the given columns only.

        Other columns are omitted from the INSERT and take their database
        defaults. Column names are validated before the ``before_insert`` hook
        runs.
        """
        filtered_struct_columns_and_values(struct, columns)
        run_before_insert(struct)
        # values are read after the hook, which may change them
        names, values = filtered_struct_columns_and_values(struct, columns)
        self._insert(struct, names, values)

    def insert_multi(self, *structs: "Struct") -> None:
        """Insert several structs of the same view with a single statement.

        Records must either all have or all lack a primary key. Generated keys
        are not stored back into the records. Records of a table mapping only
        an auto-generated primary key are rejected, use :meth:`insert` for them.
        """
        if not structs:
            return

        first = structs[0]
        view: View = first.view()
        for struct in structs[1:]:
            other = struct.view()
            if other is not view:
                msg = f"different tables in insert_multi: {view.name} and {other.name}"
                raise MixedTablesError(msg)

        pk_index: Optional[int] = None
        if is_record(first):
            with_pk = first.has_pk()
            for struct in structs[1:]:
                if is_record(struct) and struct.has_pk() != with_pk:
                    msg = f"PK is present in one struct and absent in other: first: {first}, second: {struct}"
                    raise InconsistentPrimaryKeyError(msg)
            if not with_pk:
                pk_index = first.table().pk_column_index()

        columns = view.columns()
        if pk_index is not None:
            columns = without_index(columns, pk_index)
        if not columns:
            msg = f"nothing to insert into {view.name}: only the primary key column is mapped"
            raise ColumnValidationError(msg)

        error: Optional[Exception] = None
        for struct in structs:
            try:
                run_before_insert(struct)
            except Exception as e:  # noqa: BLE001
                if error is None:
                    error = e
        if error is not None:
            raise error

        rows = [struct.values() for struct in structs]
        if pk_index is not None:
            rows = [without_index(row, pk_index) for row in rows]

        statement = insert_multi_query(self._dialect, view, columns, rows)
        self._exec(statement.sql, statement.args)

    def _update(self, record: "Record", columns: "Sequence[str]", values: "Sequence[Any]") -> None:
        statement = update_query(self._dialect, record.table(), columns, values, record.pk_value())
        result = self._exec(statement.sql, statement.args)
        self._expect_one_row(result, "UPDATE", statement.sql)

    def update(self, record: "Record") -> None:
        """Update every column of the row identified by the record's primary key.

        Raises:
            MissingPrimaryKeyError: if the record has no primary key.
            NotFoundError: if no row was updated.
            MultipleRowsAffectedError: if more than one row was updated.
        """
        if not record.has_pk():
            raise MissingPrimaryKeyError
        run_before_update(record)

        table = record.table()
        pk = table.pk_column_index()
        self._update(record, without_index(table.columns(), pk), without_index(record.values(), pk))

    def update_columns(self, record: "Record", *columns: str) -> None:
        """Update the given columns of the row identified by the record's primary key.

        Raises:
            MissingPrimaryKeyError: if the record has no primary key.
            ColumnValidationError: for unknown columns or the primary key column.
            NothingToUpdateError: if no columns were given.
            NotFoundError: if no row was updated.
        """
        if not record.has_pk():
            raise MissingPrimaryKeyError
        names, _ = filtered_columns_and_values(record, columns, is_update=True)
        if not names:
            raise NothingToUpdateError
        run_before_update(record)

        names, values = filtered_columns_and_values(record, columns, is_update=True)
        self._update(record, names, values)

    def save(self, record: "Record") -> None:
        """Update the record if it has a primary key and its row exists, insert it otherwise."""
        if record.has_pk():
            try:
                self.update(record)
            except NotFoundError:
                logger.debug("no row to update for %s, inserting", record.table().name)
            else:
                return
        self.insert(record)

    def delete(self, record: "Record") -> None:
        """Delete the row identified by the record's primary key.

        Raises:
            MissingPrimaryKeyError: if the record has no primary key.
            NotFoundError: if no row was deleted.
            MultipleRowsAffectedError: if more than one row was deleted.
        """
        if not record.has_pk():
            raise MissingPrimaryKeyError

        statement = delete_query(self._dialect, record.table(), record.pk_value())
        result = self._exec(statement.sql, statement.args)
        self._expect_one_row(result, "DELETE", statement.sql)

    def delete_from(self, view: "View", tail: str, *args: Any) -> int:
        """Delete rows matching ``tail`` and return their number; zero is not an error."""
        sql = delete_from_query(self._dialect, view, expand_tail(view, tail))
        result = self._exec(sql, args)
        return _rows_affected(result, "DELETE")
