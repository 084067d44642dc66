from sqlrecord.exceptions import (
    ColumnValidationError,
    ImproperConfigurationError,
    InconsistentPrimaryKeyError,
    MissingPrimaryKeyError,
    MixedTablesError,
    MultipleRowsAffectedError,
    NothingToUpdateError,
    NotFoundError,
    PartialResultError,
    ScanError,
    SQLRecordError,
    StructDefinitionError,
    UnhandledDialectError,
)


def test_exception_hierarchy():
    """Test exception classes inherit correctly."""
    assert issubclass(NothingToUpdateError, ColumnValidationError)
    assert issubclass(MixedTablesError, ColumnValidationError)
    assert issubclass(InconsistentPrimaryKeyError, ColumnValidationError)

    for exc_type in (
        ColumnValidationError,
        ImproperConfigurationError,
        MissingPrimaryKeyError,
        MultipleRowsAffectedError,
        NotFoundError,
        PartialResultError,
        ScanError,
        StructDefinitionError,
        UnhandledDialectError,
    ):
        assert issubclass(exc_type, SQLRecordError)


def test_sentinel_errors_have_default_messages():
    """Test errors raised without arguments carry their class detail."""
    assert str(NotFoundError()) == "no rows in result set"
    assert str(MissingPrimaryKeyError()) == "no primary key"
    assert str(NothingToUpdateError()) == "nothing to update"
    assert repr(NotFoundError()) == "NotFoundError - no rows in result set"


def test_exception_instantiation():
    """Test exceptions can be instantiated with messages."""
    exc = StructDefinitionError("Person has no fields mapped to columns")
    assert str(exc) == "Person has no fields mapped to columns"
    assert exc.detail == "Person has no fields mapped to columns"


def test_column_validation_error_columns():
    exc = ColumnValidationError("unexpected columns: a, b", ["a", "b"])
    assert exc.columns == ("a", "b")
    assert str(exc) == "unexpected columns: a, b"


def test_multiple_rows_affected_error():
    exc = MultipleRowsAffectedError(3, "UPDATE", 'UPDATE "people" SET "name" = ? WHERE "id" = ?')
    assert exc.rows_affected == 3
    assert str(exc).startswith("3 rows by UPDATE by primary key\nSQL: UPDATE")
    assert str(MultipleRowsAffectedError(2, "DELETE")) == "2 rows by DELETE by primary key"


def test_partial_result_error_chaining():
    """Test partial results keep the rows read so far and chain the cause."""
    try:
        try:
            raise ValueError("Original error")
        except ValueError as e:
            raise PartialResultError(["first", "second"]) from e
    except PartialResultError as exc:
        assert exc.results == ["first", "second"]
        assert str(exc) == "result iteration failed after 2 rows"
        assert isinstance(exc.__cause__, ValueError)
