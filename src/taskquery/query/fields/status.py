"""Status and recurring fields."""

from __future__ import annotations

from datetime import date

from ..components import Comparator, FilterOrErrorMessage, GrouperFunction
from .base import Field, FilterInstructions


class InstructionTableField(Field):
    """A field whose filters are all literal instruction lines."""

    def __init__(self) -> None:
        self._instructions = FilterInstructions()

    def can_create_filter_for_line(self, line: str) -> bool:
        return self._instructions.can_create_filter_for_line(line)

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        result = self._instructions.create_filter_or_error(line)
        if result is None:
            return super().create_filter_or_error(line, today)
        return result


class StatusField(InstructionTableField):
    """'done' and 'not done'. Cancelled tasks count as done."""

    name = "status"

    def __init__(self) -> None:
        super().__init__()
        self._instructions.add("done", lambda task: task.is_done)
        self._instructions.add("not done", lambda task: not task.is_done)

    def supports_sorting(self) -> bool:
        return True

    def comparator(self, today: date) -> Comparator:
        # Unfinished tasks first
        return lambda a, b: int(a.is_done) - int(b.is_done)

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GrouperFunction:
        return lambda task: ["Done" if task.is_done else "Todo"]


class RecurringField(InstructionTableField):
    """'is recurring' and 'is not recurring'."""

    name = "recurring"

    def __init__(self) -> None:
        super().__init__()
        self._instructions.add("is recurring", lambda task: task.is_recurring)
        self._instructions.add("is not recurring", lambda task: not task.is_recurring)

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GrouperFunction:
        return lambda task: ["Recurring" if task.is_recurring else "Not Recurring"]

