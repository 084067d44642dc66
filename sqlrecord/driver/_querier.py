"""The querier: record-oriented CRUD over one connection and one dialect."""

from typing import TYPE_CHECKING, Optional, Union

from sqlrecord.config import QuerierConfig
from sqlrecord.core.builder import qualified_columns, qualified_view
from sqlrecord.dialects import get_dialect
from sqlrecord.driver._commands import CommandsMixin
from sqlrecord.driver._selects import SelectsMixin

if TYPE_CHECKING:
    from sqlrecord.dialects import DialectName
    from sqlrecord.dialects.base import Dialect
    from sqlrecord.protocols import Connection, View

__all__ = ("Querier",)


class Querier(CommandsMixin, SelectsMixin):
    """Runs record-oriented statements on a connection.

    The connection may be a whole database handle or a single transaction;
    the querier keeps no other state and never retains rows or cursors
    between calls.
    """

    __slots__ = ("_config", "_connection", "_dialect", "_tag")

    def __init__(
        self,
        connection: "Connection",
        dialect: "Union[Dialect, DialectName, str]",
        *,
        config: Optional[QuerierConfig] = None,
        tag: Optional[str] = None,
    ) -> None:
        self._connection = connection
        self._dialect = get_dialect(dialect)
        self._config = config or QuerierConfig()
        self._tag = _sanitize_tag(tag)

    @classmethod
    def from_config(cls, connection: "Connection", config: Optional[QuerierConfig] = None) -> "Querier":
        """Create a querier using the configured default dialect."""
        config = config or QuerierConfig()
        return cls(connection, config.default_dialect, config=config)

    @property
    def connection(self) -> "Connection":
        return self._connection

    @property
    def dialect(self) -> "Dialect":
        return self._dialect

    @property
    def config(self) -> QuerierConfig:
        return self._config

    @property
    def tag(self) -> Optional[str]:
        return self._tag

    def with_tag(self, tag: str) -> "Querier":
        """Return a querier on the same connection adding ``/* tag */`` to every statement."""
        return type(self)(self._connection, self._dialect, config=self._config, tag=tag)

    def placeholder(self, index: int) -> str:
        return self._dialect.placeholder(index)

    def placeholders(self, start: int, count: int) -> "list[str]":
        return self._dialect.placeholders(start, count)

    def quote_identifier(self, identifier: str) -> str:
        return self._dialect.quote_identifier(identifier)

    def qualified_view(self, view: "View") -> str:
        """Return the quoted view name, qualified with its schema if it has one."""
        return qualified_view(self._dialect, view)

    def qualified_columns(self, view: "View") -> "list[str]":
        """Return quoted view columns, each qualified with the view."""
        return qualified_columns(self._dialect, view)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dialect={self._dialect.name!r}, tag={self._tag!r})"


def _sanitize_tag(tag: Optional[str]) -> Optional[str]:
    if not tag:
        return None
    return tag.replace("/*", "/ *").replace("*/", "* /")
