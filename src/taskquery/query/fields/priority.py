"""Priority field."""

from __future__ import annotations

import re
from datetime import date

from ...models import Priority, Task
from ..components import (
    Comparator,
    Filter,
    FilterOrErrorMessage,
    GrouperFunction,
    QueryComponentOrError,
)
from ..explanation import Explanation
from .base import Field

_LEVELS = "|".join(priority.value for priority in Priority)


class PriorityField(Field):
    """Filter, sort and group by priority.

    Priorities are ordered highest, high, medium, none, low, lowest.
    'above' means more important and 'below' less important.
    """

    name = "priority"

    _REGEXP = re.compile(rf"^priority is (above |below |not )?({_LEVELS})$")

    def filter_regexp(self) -> re.Pattern[str]:
        return re.compile(r"^priority ")

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        match = self._REGEXP.search(line)
        if match is None:
            return QueryComponentOrError.from_error(line, "do not understand query filter (priority)")

        relation = (match.group(1) or "").strip()
        level = Priority(match.group(2)).rank
        if relation == "above":
            predicate = lambda task: task.priority.rank < level  # noqa: E731
        elif relation == "below":
            predicate = lambda task: task.priority.rank > level  # noqa: E731
        elif relation == "not":
            predicate = lambda task: task.priority.rank != level  # noqa: E731
        else:
            predicate = lambda task: task.priority.rank == level  # noqa: E731

        return QueryComponentOrError.from_component(
            line, Filter(line, predicate, Explanation(line))
        )

    def supports_sorting(self) -> bool:
        return True

    def comparator(self, today: date) -> Comparator:
        return lambda a, b: a.priority.rank - b.priority.rank

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GrouperFunction:
        def classify(task: Task) -> list[str]:
            priority = task.priority
            return [f"Priority {priority.rank}: {priority.display_name} priority"]

        return classify
