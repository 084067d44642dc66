"""Dialect strategy: the per-engine differences the querier depends on."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from sqlglot import exp

__all__ = ("DefaultValuesMethod", "Dialect", "LastInsertIdMethod", "SelectLimitMethod")


class LastInsertIdMethod(str, Enum):
    """Method of receiving primary key of last inserted row."""

    LAST_INSERT_ID = "last_insert_id"
    """Driver-reported identity of the last inserted row."""
    RETURNING = "returning"
    """``INSERT ... RETURNING id`` syntax."""
    OUTPUT_INSERTED = "output_inserted"
    """``INSERT ... OUTPUT INSERTED.id`` syntax."""

    def __str__(self) -> str:
        return self.value


class SelectLimitMethod(str, Enum):
    """Method of limiting the number of rows in a query result."""

    LIMIT = "limit"
    """Trailing ``LIMIT n``."""
    SELECT_TOP = "select_top"
    """Leading ``SELECT TOP n``."""

    def __str__(self) -> str:
        return self.value


class DefaultValuesMethod(str, Enum):
    """Method of inserting a row where every column takes its default."""

    DEFAULT_VALUES = "default_values"
    """``INSERT INTO t DEFAULT VALUES``."""
    EMPTY_LISTS = "empty_lists"
    """``INSERT INTO t () VALUES ()``."""

    def __str__(self) -> str:
        return self.value


class Dialect(ABC):
    """Differences between SQL dialects.

    Implementations are stateless; each module exposes a single instance.
    """

    __slots__ = ()

    name: ClassVar[str]
    """Name used to select the dialect."""
    sqlglot_dialect: ClassVar[str]
    """sqlglot dialect that quotes identifiers the way this engine does."""

    @abstractmethod
    def placeholder(self, index: int) -> str:
        """Return the placeholder for the 1-based parameter ``index``, typically ``?`` or ``$1``."""

    def placeholders(self, start: int, count: int) -> "list[str]":
        """Return ``count`` placeholders starting at index ``start``."""
        return [self.placeholder(start + i) for i in range(count)]

    def quote_identifier(self, identifier: str) -> str:
        """Return a quoted identifier, typically ``"identifier"`` or ``[identifier]``."""
        return exp.to_identifier(identifier, quoted=True).sql(dialect=self.sqlglot_dialect)

    @abstractmethod
    def last_insert_id_method(self) -> LastInsertIdMethod:
        """Return the method of receiving primary key of last inserted row."""

    @abstractmethod
    def select_limit_method(self) -> SelectLimitMethod:
        """Return the method of limiting the number of rows in a query result."""

    def default_values_method(self) -> DefaultValuesMethod:
        """Return the method of inserting a row with no explicit columns."""
        return DefaultValuesMethod.DEFAULT_VALUES

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
