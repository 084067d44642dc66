"""Concrete views, tables and struct mixins built from dataclass metadata.

Usage::

    @table("people")
    @dataclass
    class Person(RecordMixin):
        id: int = column_field("id", pk=True, default=0)
        name: str = column_field("name", default="")

    PersonTable = table_of(Person)

The decorators build the view or table object once, when the class is
defined, and every instance refers back to that shared object.
"""

import dataclasses
from collections.abc import Callable
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Optional, TypeVar, cast

from sqlglot import exp

from sqlrecord.exceptions import StructDefinitionError
from sqlrecord.parse import StructInfo, parse_dataclass

if TYPE_CHECKING:
    from sqlrecord.protocols import Pointer

__all__ = (
    "FieldPointer",
    "RecordMixin",
    "StructMixin",
    "StructView",
    "TableView",
    "ViewBase",
    "table",
    "table_of",
    "view",
    "view_of",
)

VIEW_ATTRIBUTE = "__sqlrecord_view__"

_ClassT = TypeVar("_ClassT", bound=type)


class ViewBase:
    """Field and column lookups shared by views and tables."""

    __slots__ = ("_fields", "_icolumns", "_mapping", "_pk")

    def __init__(self, info: StructInfo) -> None:
        mapping: dict[str, str] = {}
        for f in info.fields:
            for key in (f.name, f.column):
                existing = mapping.get(key)
                if existing is not None and existing != f.column:
                    msg = f"{info.type}: {key!r} refers to both {existing!r} and {f.column!r}"
                    raise StructDefinitionError(msg)
                mapping[key] = f.column
        self._mapping = MappingProxyType(mapping)
        self._fields = tuple(f.name for f in info.fields)
        self._icolumns = tuple(exp.column(f.column, table=info.sql_name, quoted=True) for f in info.fields)
        self._pk = info.pk_field().column if info.is_table() else ""

    def has_col(self, field: str) -> Optional[str]:
        return self._mapping.get(field)

    def to_col(self, field: str) -> str:
        return self._mapping.get(field, field)

    def fields(self) -> "list[str]":
        return list(self._fields)

    def icolumns(self) -> "tuple[exp.Column, ...]":
        return self._icolumns

    def pk(self) -> str:
        return self._pk


def _new_zero_instance(struct_type: type) -> Any:
    required = {
        f.name: None
        for f in dataclasses.fields(struct_type)
        if f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    }
    return struct_type(**required)


class StructView(ViewBase):
    """View bound to a dataclass type."""

    __slots__ = ("_columns", "_info", "_struct_type")

    def __init__(self, info: StructInfo, struct_type: type) -> None:
        super().__init__(info)
        self._info = info
        self._struct_type = struct_type
        self._columns = tuple(info.columns())

    @property
    def schema(self) -> str:
        return self._info.sql_schema

    @property
    def name(self) -> str:
        return self._info.sql_name

    @property
    def info(self) -> StructInfo:
        return self._info

    @property
    def struct_type(self) -> type:
        return self._struct_type

    def columns(self) -> "list[str]":
        return list(self._columns)

    def new_struct(self) -> Any:
        return _new_zero_instance(self._struct_type)

    def __repr__(self) -> str:
        qualified = f"{self.schema}.{self.name}" if self.schema else self.name
        return f"{type(self).__name__}({self._info.type} -> {qualified})"


class TableView(StructView):
    """Table with a single-column primary key, bound to a dataclass type."""

    __slots__ = ()

    def __init__(self, info: StructInfo, struct_type: type) -> None:
        if not info.is_table():
            msg = f"{info.type}: table {info.sql_name!r} requires a primary key field"
            raise StructDefinitionError(msg)
        super().__init__(info, struct_type)

    def new_record(self) -> Any:
        return _new_zero_instance(self._struct_type)

    def pk_column_index(self) -> int:
        return self._info.pk_field_index


class FieldPointer:
    """Addressable slot of one field of one struct instance."""

    __slots__ = ("_name", "_owner")

    def __init__(self, owner: Any, name: str) -> None:
        self._owner = owner
        self._name = name

    def get(self) -> Any:
        return getattr(self._owner, self._name)

    def set(self, value: Any) -> None:
        setattr(self._owner, self._name, value)

    def __repr__(self) -> str:
        return f"FieldPointer({type(self._owner).__name__}.{self._name})"


class StructMixin:
    """Struct protocol implementation for dataclasses decorated with :func:`view` or :func:`table`."""

    __slots__ = ()

    __sqlrecord_view__: ClassVar[StructView]

    def view(self) -> StructView:
        return type(self).__sqlrecord_view__

    def values(self) -> "list[Any]":
        return [getattr(self, name) for name in self.view().fields()]

    def pointers(self) -> "list[Pointer]":
        return [FieldPointer(self, name) for name in self.view().fields()]

    def __str__(self) -> str:
        info = self.view().info
        parts = [f"{f.name}: {getattr(self, f.name)!r} ({f.type})" for f in info.fields]
        return f"{info.type}({', '.join(parts)})"


class RecordMixin(StructMixin):
    """Record protocol implementation for dataclasses decorated with :func:`table`."""

    __slots__ = ()

    __sqlrecord_view__: ClassVar[TableView]

    def table(self) -> TableView:
        return type(self).__sqlrecord_view__

    def pk_value(self) -> Any:
        return getattr(self, self.table().info.pk_field().name)

    def pk_pointer(self) -> "Pointer":
        return FieldPointer(self, self.table().info.pk_field().name)

    def has_pk(self) -> bool:
        value = self.pk_value()
        return value is not None and value != self.table().info.pk_field().zero

    def set_pk(self, pk: Any) -> None:
        setattr(self, self.table().info.pk_field().name, pk)


def view(name: str, *, schema: str = "") -> "Callable[[_ClassT], _ClassT]":
    """Class decorator mapping a dataclass to an SQL view.

    Record classes need a primary key and are rejected here; map them with :func:`table`.
    """

    def wrap(cls: _ClassT) -> _ClassT:
        if issubclass(cls, RecordMixin):
            msg = f"{cls.__name__} is a record; decorate it with @table instead of @view"
            raise StructDefinitionError(msg)
        setattr(cls, VIEW_ATTRIBUTE, StructView(parse_dataclass(cls, name=name, schema=schema), cls))
        return cls

    return wrap


def table(name: str, *, schema: str = "") -> "Callable[[_ClassT], _ClassT]":
    """Class decorator mapping a dataclass to an SQL table with a primary key."""

    def wrap(cls: _ClassT) -> _ClassT:
        setattr(cls, VIEW_ATTRIBUTE, TableView(parse_dataclass(cls, name=name, schema=schema), cls))
        return cls

    return wrap


def view_of(obj: Any) -> StructView:
    """Return the view of a decorated class or of one of its instances."""
    cls = obj if isinstance(obj, type) else type(obj)
    result = getattr(cls, VIEW_ATTRIBUTE, None)
    if result is None:
        msg = f"{cls.__name__} is not mapped; decorate it with @view or @table"
        raise StructDefinitionError(msg)
    return cast("StructView", result)


def table_of(obj: Any) -> TableView:
    """Return the table of a decorated class or of one of its instances."""
    result = view_of(obj)
    if not isinstance(result, TableView):
        msg = f"{result.struct_type.__name__} is mapped to a view without primary key"
        raise StructDefinitionError(msg)
    return result
