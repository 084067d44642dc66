from collections.abc import Sequence
from typing import Any

from typing_extensions import TypeAlias

__all__ = ("Args", "RowValues")


Args: TypeAlias = "tuple[Any, ...]"
"""Positional statement arguments in placeholder order."""
RowValues: TypeAlias = "Sequence[Any]"
"""One raw result row as returned by the connection."""
