"""SQL text assembly for record-oriented statements.

Every function here is pure: it takes a dialect, view metadata and values,
and returns statement text (plus positional arguments where the statement
binds any). Nothing is executed.
"""

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from sqlrecord.dialects.base import DefaultValuesMethod, LastInsertIdMethod, SelectLimitMethod
from sqlrecord.typing import Args

if TYPE_CHECKING:
    from sqlrecord.dialects.base import Dialect
    from sqlrecord.protocols import Table, View

__all__ = (
    "Statement",
    "delete_from_query",
    "delete_query",
    "expand_tail",
    "find_all_tail",
    "find_tail",
    "insert_multi_query",
    "insert_query",
    "qualified_columns",
    "qualified_view",
    "select_query",
    "update_query",
)

# $name and ${name}; numeric tokens such as $1 are placeholders and stay as they are
_TAIL_TOKEN = re.compile(r"\$(?:\{(?P<braced>[^}]*)\}|(?P<name>[A-Za-z_][A-Za-z0-9_]*))")


class Statement(NamedTuple):
    """Statement text with its positional arguments."""

    sql: str
    args: "Args" = ()


def qualified_view(dialect: "Dialect", view: "View") -> str:
    """Return the quoted view name, qualified with its schema if it has one."""
    if view.schema:
        return f"{dialect.quote_identifier(view.schema)}.{dialect.quote_identifier(view.name)}"
    return dialect.quote_identifier(view.name)


def qualified_columns(dialect: "Dialect", view: "View") -> "list[str]":
    """Return quoted view columns, each qualified with the view."""
    qv = qualified_view(dialect, view)
    return [f"{qv}.{dialect.quote_identifier(c)}" for c in view.columns()]


def expand_tail(view: "View", tail: str) -> str:
    """Replace ``$field`` and ``${field}`` tokens in a tail with column names."""
    if "$" not in tail:
        return tail

    def _replace(match: "re.Match[str]") -> str:
        name = match.group("braced")
        if name is None:
            name = match.group("name")
        return view.to_col(name)

    return _TAIL_TOKEN.sub(_replace, tail)


def select_query(dialect: "Dialect", view: "View", tail: str, limit1: bool) -> str:
    """Return a SELECT of every view column followed by ``tail``.

    For ``SELECT TOP`` dialects a single-row query gets ``TOP 1``; for
    ``LIMIT`` dialects the tail is expected to carry ``LIMIT 1`` itself.
    """
    command = "SELECT"
    if limit1 and dialect.select_limit_method() is SelectLimitMethod.SELECT_TOP:
        command += " TOP 1"

    query = f"{command} {', '.join(qualified_columns(dialect, view))} FROM {qualified_view(dialect, view)}"
    if tail:
        query += f" {tail}"
    return query


def insert_query(
    dialect: "Dialect",
    view: "View",
    columns: "Sequence[str]",
    values: "Sequence[Any]",
    pk_column: Optional[str] = None,
) -> Statement:
    """Return a single-row INSERT.

    Args:
        dialect: Target dialect.
        view: View or table to insert into.
        columns: Column names, already filtered.
        values: Values aligned with ``columns``.
        pk_column: Primary key column to report back, or None. Only used by
            dialects returning the generated key from the statement itself.

    Returns:
        The statement and its arguments.
    """
    method = dialect.last_insert_id_method()
    quoted_pk = dialect.quote_identifier(pk_column) if pk_column else None

    query = f"INSERT INTO {qualified_view(dialect, view)}"
    use_default_values = not columns and dialect.default_values_method() is DefaultValuesMethod.DEFAULT_VALUES
    if not use_default_values:
        query += f" ({', '.join(dialect.quote_identifier(c) for c in columns)})"
    if quoted_pk and method is LastInsertIdMethod.OUTPUT_INSERTED:
        query += f" OUTPUT INSERTED.{quoted_pk}"
    if use_default_values:
        query += " DEFAULT VALUES"
    else:
        query += f" VALUES ({', '.join(dialect.placeholders(1, len(columns)))})"
    if quoted_pk and method is LastInsertIdMethod.RETURNING:
        query += f" RETURNING {quoted_pk}"

    return Statement(query, tuple(values))


def insert_multi_query(
    dialect: "Dialect", view: "View", columns: "Sequence[str]", rows: "Sequence[Sequence[Any]]"
) -> Statement:
    """Return a multi-row INSERT with one placeholder group per row, in input order."""
    width = len(columns)
    placeholders = dialect.placeholders(1, width * len(rows))
    groups = ", ".join(f"({', '.join(placeholders[width * i : width * (i + 1)])})" for i in range(len(rows)))
    query = (
        f"INSERT INTO {qualified_view(dialect, view)} "
        f"({', '.join(dialect.quote_identifier(c) for c in columns)}) VALUES {groups}"
    )
    args: list[Any] = []
    for row in rows:
        args.extend(row)
    return Statement(query, tuple(args))


def update_query(
    dialect: "Dialect", table: "Table", columns: "Sequence[str]", values: "Sequence[Any]", pk_value: Any
) -> Statement:
    """Return an UPDATE of ``columns`` for the row identified by ``pk_value``.

    The primary key placeholder follows the SET placeholders.
    """
    placeholders = dialect.placeholders(1, len(columns))
    assignments = ", ".join(f"{dialect.quote_identifier(c)} = {p}" for c, p in zip(columns, placeholders))
    query = (
        f"UPDATE {qualified_view(dialect, table)} SET {assignments} "
        f"WHERE {dialect.quote_identifier(table.pk())} = {dialect.placeholder(len(columns) + 1)}"
    )
    return Statement(query, (*values, pk_value))


def delete_query(dialect: "Dialect", table: "Table", pk_value: Any) -> Statement:
    """Return a DELETE of the row identified by ``pk_value``."""
    query = (
        f"DELETE FROM {qualified_view(dialect, table)} "
        f"WHERE {dialect.quote_identifier(table.pk())} = {dialect.placeholder(1)}"
    )
    return Statement(query, (pk_value,))


def delete_from_query(dialect: "Dialect", view: "View", tail: str) -> str:
    """Return a DELETE with a caller-supplied tail; no predicate is added."""
    query = f"DELETE FROM {qualified_view(dialect, view)}"
    if tail:
        query += f" {tail}"
    return query


def find_tail(dialect: "Dialect", view_name: str, column: str, arg: Any, limit1: bool) -> "tuple[str, bool]":
    """Return a WHERE tail matching ``column`` against ``arg``.

    Returns:
        The tail, and whether ``arg`` must be bound (it is not for ``IS NULL``).
    """
    qi = f"{dialect.quote_identifier(view_name)}.{dialect.quote_identifier(column)}"
    if arg is None:
        tail, need_arg = f"WHERE {qi} IS NULL", False
    else:
        tail, need_arg = f"WHERE {qi} = {dialect.placeholder(1)}", True

    if limit1 and dialect.select_limit_method() is SelectLimitMethod.LIMIT:
        tail += " LIMIT 1"

    return tail, need_arg


def find_all_tail(dialect: "Dialect", view: "View", column: str, count: int) -> str:
    """Return a WHERE tail matching ``column`` against ``count`` values."""
    qi = f"{qualified_view(dialect, view)}.{dialect.quote_identifier(column)}"
    return f"WHERE {qi} IN ({', '.join(dialect.placeholders(1, count))})"
