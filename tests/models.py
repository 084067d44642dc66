"""Mapped types shared by the test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from sqlrecord import RecordMixin, StructMixin, column_field, table, table_of, view, view_of
from sqlrecord.exceptions import NotFoundError

__all__ = (
    "Contact",
    "IDOnly",
    "IDOnlyTable",
    "LegacyPerson",
    "LegacyPersonTable",
    "Manager",
    "ManagerTable",
    "Person",
    "PersonProject",
    "PersonProjectView",
    "PersonTable",
    "Project",
    "ProjectTable",
    "Token",
    "TokenTable",
)


@table("people")
@dataclass
class Person(RecordMixin):
    id: int = column_field("id", pk=True, default=0)
    name: str = column_field("name", default="")
    email: Optional[str] = column_field("email", default=None)
    age: int = column_field("age", default=0)


PersonTable = table_of(Person)


@table("projects")
@dataclass
class Project(RecordMixin):
    """Record with hooks; the flags and the call log are not mapped."""

    id: str = column_field("id", pk=True, default="")
    name: str = column_field("name", default="")
    updated_at: Optional[datetime] = column_field("updated_at", default=None)
    fail_insert: bool = field(default=False, compare=False)
    fail_update: bool = field(default=False, compare=False)
    fail_find: bool = field(default=False, compare=False)
    calls: list[str] = field(default_factory=list, compare=False)

    def before_insert(self) -> None:
        self.calls.append("before_insert")
        if self.fail_insert:
            msg = f"insert rejected for {self.id!r}"
            raise ValueError(msg)
        self.name = self.name.strip()

    def before_update(self) -> None:
        self.calls.append("before_update")
        if self.fail_update:
            msg = f"update rejected for {self.id!r}"
            raise ValueError(msg)
        self.updated_at = datetime(2024, 1, 1, 12, 0, 0)

    def after_find(self) -> None:
        self.calls.append("after_find")
        if self.fail_find:
            msg = f"find rejected for {self.id!r}"
            raise ValueError(msg)
        self.name = self.name.upper()


ProjectTable = table_of(Project)


@view("person_project")
@dataclass
class PersonProject(StructMixin):
    person_id: int = column_field("person_id", default=0)
    project_id: str = column_field("project_id", default="")


PersonProjectView = view_of(PersonProject)


@table("legacy_people", schema="legacy")
@dataclass
class LegacyPerson(RecordMixin):
    id: Optional[int] = column_field("id", pk=True, default=None)
    full_name: str = column_field("name", default="")
    scratch: Any = None


LegacyPersonTable = table_of(LegacyPerson)


@table("id_only")
@dataclass
class IDOnly(RecordMixin):
    id: int = column_field("id", pk=True, default=0)


IDOnlyTable = table_of(IDOnly)


@table("people")
@dataclass
class Contact(RecordMixin):
    """Second mapping of the ``people`` table, distinct from :class:`Person`."""

    id: int = column_field("id", pk=True, default=0)
    name: str = column_field("name", default="")
    email: Optional[str] = column_field("email", default=None)
    age: int = column_field("age", default=0)


@table("people")
@dataclass
class Manager(RecordMixin):
    """Person whose ``after_find`` looks up a report that may be missing."""

    id: int = column_field("id", pk=True, default=0)
    name: str = column_field("name", default="")
    email: Optional[str] = column_field("email", default=None)
    age: int = column_field("age", default=0)

    def after_find(self) -> None:
        if self.email is None:
            msg = f"no reports for {self.name}"
            raise NotFoundError(msg)


ManagerTable = table_of(Manager)


@table("tokens")
@dataclass
class Token(RecordMixin):
    """Record with a client-generated primary key."""

    id: str = column_field("id", pk=True, default_factory=lambda: uuid4().hex)
    label: str = column_field("label", default="")


TokenTable = table_of(Token)
