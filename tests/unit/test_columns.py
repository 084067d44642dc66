"""Tests for column subset filtering."""

import pytest

from sqlrecord.core.columns import (
    filtered_column_indexes,
    filtered_columns_and_values,
    filtered_struct_columns_and_values,
    without_index,
)
from sqlrecord.exceptions import ColumnValidationError
from tests.models import LegacyPerson, LegacyPersonTable, Person, PersonProject, PersonTable


def test_without_index() -> None:
    items = ["a", "b", "c"]

    assert without_index(items, 1) == ["a", "c"]
    assert without_index(items, 5) == items
    assert items == ["a", "b", "c"]


def test_indexes_follow_table_order() -> None:
    """Request order and duplicates do not affect the result."""
    assert filtered_column_indexes(PersonTable, ["age", "name", "age"]) == [1, 3]


def test_field_names_and_marker_resolve_to_columns() -> None:
    assert filtered_column_indexes(LegacyPersonTable, ["full_name"]) == [1]
    assert filtered_column_indexes(LegacyPersonTable, ["$full_name"]) == [1]
    assert filtered_column_indexes(LegacyPersonTable, ["$name"]) == [1]


def test_empty_request() -> None:
    assert filtered_column_indexes(PersonTable, []) == []


def test_unknown_columns_are_all_reported() -> None:
    with pytest.raises(ColumnValidationError) as exc_info:
        filtered_column_indexes(PersonTable, ["name", "zeta", "alpha"])

    assert exc_info.value.columns == ("alpha", "zeta")
    assert str(exc_info.value) == "unexpected columns: alpha, zeta"


def test_primary_key_rejected_for_update() -> None:
    with pytest.raises(ColumnValidationError, match="will not update PK column: id") as exc_info:
        filtered_column_indexes(PersonTable, ["name", "id"], pk_index=0)

    assert exc_info.value.columns == ("id",)


def test_filtered_columns_and_values_for_update() -> None:
    person = Person(id=1, name="Ann", email="ann@example.com", age=30)

    assert filtered_columns_and_values(person, ["email", "$age"], is_update=True) == (
        ["email", "age"],
        ["ann@example.com", 30],
    )
    with pytest.raises(ColumnValidationError):
        filtered_columns_and_values(person, ["id"], is_update=True)


def test_filtered_columns_and_values_for_insert_allows_pk() -> None:
    legacy = LegacyPerson(id=4, full_name="Ann")

    assert filtered_columns_and_values(legacy, ["id", "full_name"], is_update=False) == (["id", "name"], [4, "Ann"])


def test_filtered_struct_columns_and_values() -> None:
    link = PersonProject(person_id=1, project_id="p1")

    assert filtered_struct_columns_and_values(link, ["project_id"]) == (["project_id"], ["p1"])
