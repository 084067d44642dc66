"""Execution engine running record-oriented statements on a connection."""

from sqlrecord.driver._commands import CommandsMixin
from sqlrecord.driver._instrumentation import InstrumentationMixin
from sqlrecord.driver._querier import Querier
from sqlrecord.driver._rows import next_row, run_after_find, run_before_insert, run_before_update, scan_row
from sqlrecord.driver._selects import SelectsMixin

__all__ = (
    "CommandsMixin",
    "InstrumentationMixin",
    "Querier",
    "SelectsMixin",
    "next_row",
    "run_after_find",
    "run_before_insert",
    "run_before_update",
    "scan_row",
)
