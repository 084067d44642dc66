"""Extract view and table metadata from dataclass definitions.

A dataclass field is mapped to a column through its ``sql`` metadata entry::

    id: int = field(default=0, metadata={"sql": "id,pk"})
    name: str = field(default="", metadata={"sql": "name"})

The first part is the column name, ``pk`` marks the single-column primary key,
and ``"-"`` (or no entry at all) leaves the field unmapped.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

from sqlrecord.exceptions import StructDefinitionError

__all__ = ("SQL_METADATA_KEY", "FieldInfo", "StructInfo", "column_field", "parse_dataclass")

SQL_METADATA_KEY = "sql"
_PK_OPTION = "pk"


@dataclass(frozen=True)
class FieldInfo:
    """Mapping of one struct field to one column."""

    name: str
    type: str
    column: str
    pk_type: str = ""
    zero: Any = None

    @property
    def is_pk(self) -> bool:
        return self.pk_type != ""


@dataclass(frozen=True)
class StructInfo:
    """Mapping of one struct type to one view or table."""

    type: str
    sql_schema: str
    sql_name: str
    fields: "tuple[FieldInfo, ...]"
    pk_field_index: int = -1

    def columns(self) -> "list[str]":
        return [f.column for f in self.fields]

    def is_table(self) -> bool:
        return self.pk_field_index >= 0

    def pk_field(self) -> FieldInfo:
        if not self.is_table():
            msg = f"{self.type} has no primary key field"
            raise StructDefinitionError(msg)
        return self.fields[self.pk_field_index]


def column_field(column: str, *, pk: bool = False, **kwargs: Any) -> Any:
    """Declare a dataclass field mapped to ``column``.

    Remaining keyword arguments are passed to :func:`dataclasses.field`. The
    ``default`` of a primary key field is its zero value, the value meaning
    "not set". A field with a ``default_factory`` has no zero value other than
    ``None``, so a primary key generated client side (``uuid.uuid4`` and the
    like) counts as set from construction and is always inserted.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SQL_METADATA_KEY] = f"{column},{_PK_OPTION}" if pk else column
    return dataclasses.field(metadata=metadata, **kwargs)


def _zero_value(f: "dataclasses.Field[Any]") -> Any:
    if f.default is not dataclasses.MISSING:
        return f.default
    return None


def _type_name(tp: Any) -> str:
    if isinstance(tp, str):
        return tp
    return getattr(tp, "__name__", repr(tp))


def _parse_tag(owner: str, field_name: str, tag: str) -> "Optional[tuple[str, bool]]":
    if tag == "-":
        return None
    column, *options = (part.strip() for part in tag.split(","))
    if not column:
        msg = f"{owner}.{field_name}: empty column name in tag {tag!r}"
        raise StructDefinitionError(msg)
    unknown = [o for o in options if o and o != _PK_OPTION]
    if unknown:
        msg = f"{owner}.{field_name}: unexpected tag options {unknown!r}"
        raise StructDefinitionError(msg)
    return column, _PK_OPTION in options


def parse_dataclass(cls: type, name: str, schema: str = "") -> StructInfo:
    """Build :class:`StructInfo` for a dataclass type.

    Args:
        cls: The dataclass type to inspect.
        name: View or table name in SQL database.
        schema: Schema name, empty for the default schema.

    Raises:
        StructDefinitionError: if ``cls`` is not a dataclass, maps no columns,
            maps a column twice, or marks more than one primary key.

    Returns:
        Metadata describing the mapping.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        msg = f"{cls!r} is not a dataclass type"
        raise StructDefinitionError(msg)
    if not name:
        msg = f"{cls.__name__}: SQL name is required"
        raise StructDefinitionError(msg)

    owner = cls.__name__
    fields: list[FieldInfo] = []
    pk_index = -1
    seen: set[str] = set()
    for f in dataclasses.fields(cls):
        tag = f.metadata.get(SQL_METADATA_KEY)
        if tag is None:
            continue
        parsed = _parse_tag(owner, f.name, tag)
        if parsed is None:
            continue
        column, is_pk = parsed
        if column in seen:
            msg = f"{owner}.{f.name}: column {column!r} is already mapped"
            raise StructDefinitionError(msg)
        seen.add(column)
        type_name = _type_name(f.type)
        if is_pk:
            if pk_index >= 0:
                msg = f"{owner}: multiple primary key fields: {fields[pk_index].name!r} and {f.name!r}"
                raise StructDefinitionError(msg)
            pk_index = len(fields)
        fields.append(
            FieldInfo(
                name=f.name,
                type=type_name,
                column=column,
                pk_type=type_name if is_pk else "",
                zero=_zero_value(f),
            )
        )

    if not fields:
        msg = f"{owner} has no fields mapped to columns"
        raise StructDefinitionError(msg)

    return StructInfo(type=owner, sql_schema=schema, sql_name=name, fields=tuple(fields), pk_field_index=pk_index)
