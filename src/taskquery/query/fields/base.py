"""Base class for query fields."""

from __future__ import annotations

import re
from abc import ABC
from datetime import date

from ..components import (
    Comparator,
    Filter,
    FilterFunction,
    FilterOrErrorMessage,
    Grouper,
    GrouperFunction,
    GrouperOrErrorMessage,
    QueryComponentOrError,
    Sorter,
    SorterOrErrorMessage,
)
from ..explanation import Explanation


class Field(ABC):
    """A named capability over one task attribute.

    A field recognizes the instruction lines it owns and compiles them
    into a Filter, and may also provide a Sorter and a Grouper.
    Fields hold no state beyond what they were constructed with.
    """

    name: str

    # --- Filtering ---

    def filter_regexp(self) -> re.Pattern[str] | None:
        """Pattern matching the filter lines this field owns, if any."""
        return None

    def can_create_filter_for_line(self, line: str) -> bool:
        regexp = self.filter_regexp()
        if regexp is None:
            return False
        return regexp.search(line) is not None

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        return QueryComponentOrError.from_error(
            line, f"do not understand query filter ({self.name})"
        )

    # --- Sorting ---

    def supports_sorting(self) -> bool:
        return False

    def comparator(self, today: date) -> Comparator:
        raise NotImplementedError(f"sorting is not supported by field {self.name}")

    def sorter_regexp(self) -> re.Pattern[str]:
        return re.compile(rf"^sort by ({re.escape(self.name)})( reverse)?$")

    def can_create_sorter_for_line(self, line: str) -> bool:
        return self.supports_sorting() and self.sorter_regexp().search(line) is not None

    def create_sorter(self, today: date, reverse: bool = False) -> Sorter:
        return Sorter(self.name, self.comparator(today), reverse)

    def create_sorter_from_line(self, line: str, today: date) -> SorterOrErrorMessage | None:
        """Compile a 'sort by' line, or return None if it is not for this field."""
        if not self.supports_sorting():
            return None
        match = self.sorter_regexp().search(line)
        if match is None:
            return None
        sorter = self.create_sorter(today, reverse=match.group(2) is not None)
        return QueryComponentOrError.from_component(line, sorter)

    # --- Grouping ---

    def supports_grouping(self) -> bool:
        return False

    def grouper(self) -> GrouperFunction:
        raise NotImplementedError(f"grouping is not supported by field {self.name}")

    def grouper_regexp(self) -> re.Pattern[str]:
        return re.compile(rf"^group by ({re.escape(self.name)})( reverse)?$")

    def can_create_grouper_for_line(self, line: str) -> bool:
        return self.supports_grouping() and self.grouper_regexp().search(line) is not None

    def create_grouper(self, reverse: bool = False) -> Grouper:
        return Grouper(self.name, self.grouper(), reverse)

    def create_grouper_from_line(self, line: str, today: date) -> GrouperOrErrorMessage | None:
        """Compile a 'group by' line, or return None if it is not for this field."""
        if not self.supports_grouping():
            return None
        match = self.grouper_regexp().search(line)
        if match is None:
            return None
        grouper = self.create_grouper(reverse=match.group(2) is not None)
        return QueryComponentOrError.from_component(line, grouper)


class FilterInstructions:
    """A table of literal instruction lines, such as 'not done'.

    Each instruction explains itself with its own text.
    """

    def __init__(self) -> None:
        self._instructions: dict[str, FilterFunction] = {}

    def add(self, instruction: str, predicate: FilterFunction) -> None:
        self._instructions[instruction] = predicate

    def can_create_filter_for_line(self, line: str) -> bool:
        return line in self._instructions

    def create_filter_or_error(self, line: str) -> FilterOrErrorMessage | None:
        """Compile the line, or return None if it is not in the table."""
        predicate = self._instructions.get(line)
        if predicate is None:
            return None
        return QueryComponentOrError.from_component(
            line, Filter(line, predicate, Explanation(line))
        )


def compare_by_presence(a: object | None, b: object | None) -> int | None:
    """Order present values before missing ones.

    Returns:
        -1 or 1 when exactly one value is missing, 0 when both are,
        None when both are present and need a real comparison
    """
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return None
