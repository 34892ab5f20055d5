"""Date fields: created, done, due, scheduled, start and happens.

Every date field shares one implementation. A field is described by:

- the accessor returning the task's date value(s),
- whether a task without the date matches relational searches,
- the name used in instructions and explanations.

'happens' looks at start, scheduled and due together: a relational
search matches when any of them matches, and it sorts and groups by
the earliest of them.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from datetime import date

from ...models import Task, TaskDate
from ...utils import compare_values, format_explanation_date, format_group_date
from ..components import (
    Comparator,
    Filter,
    FilterFunction,
    FilterOrErrorMessage,
    GrouperFunction,
    QueryComponentOrError,
)
from ..date_parser import PERIODS, parse_date, period_boundaries
from ..explanation import Explanation
from .base import Field, FilterInstructions, compare_by_presence

DateAccessor = Callable[[Task], Sequence[TaskDate | None]]

RELATIONS = ("on or before", "on or after", "before", "after", "on")

_COMPARISONS: dict[str, Callable[[date, date], bool]] = {
    "before": lambda value, boundary: value < boundary,
    "after": lambda value, boundary: value > boundary,
    "on or before": lambda value, boundary: value <= boundary,
    "on or after": lambda value, boundary: value >= boundary,
    "on": lambda value, boundary: value == boundary,
}


def compare_task_dates(a: TaskDate | None, b: TaskDate | None) -> int:
    """Order dates: valid dates by value, then invalid dates, then missing dates."""
    result = compare_by_presence(a, b)
    if result is not None:
        return result
    value_a = a.value
    value_b = b.value
    result = compare_by_presence(value_a, value_b)
    if result is not None:
        return result
    return compare_values(value_a, value_b)


def earliest_date(dates: Sequence[TaskDate | None]) -> TaskDate | None:
    """The first of the dates in sort order, or None if none is set."""
    best: TaskDate | None = None
    for candidate in dates:
        if candidate is not None and (best is None or compare_task_dates(candidate, best) < 0):
            best = candidate
    return best


class DateField(Field):
    """Filter, sort and group by a date value of a task."""

    def __init__(
        self,
        name: str,
        dates: DateAccessor,
        *,
        keywords: tuple[str, ...] | None = None,
        missing_matches: bool = False,
        explanation_name: str | None = None,
    ) -> None:
        """
        Args:
            name: Field name, as in 'has due date' and 'sort by due'
            dates: Returns the task's values for this field, any may be None
            keywords: Words starting relational and period instructions
                (defaults to the name)
            missing_matches: Whether tasks without the date match relational
                and period searches
            explanation_name: Name used in explanations (defaults to the name)
        """
        self.name = name
        self._dates = dates
        self.missing_matches = missing_matches
        self.explanation_name = explanation_name or name

        keyword = "|".join(re.escape(word) for word in (keywords or (name,)))
        relations = "|".join(RELATIONS)
        periods = "|".join(PERIODS)
        self._period_regexp = re.compile(rf"^(?:{keyword}) (last|this|next) ({periods})$")
        self._filter_regexp = re.compile(rf"^(?:{keyword}) (?:({relations}) )?(.*)$")

        self._instructions = FilterInstructions()
        self._instructions.add(f"has {name} date", lambda task: bool(self.present_dates(task)))
        self._instructions.add(f"no {name} date", lambda task: not self.present_dates(task))
        self._instructions.add(
            f"{name} date is invalid",
            lambda task: any(not d.is_valid for d in self.present_dates(task)),
        )

    def present_dates(self, task: Task) -> list[TaskDate]:
        return [d for d in self._dates(task) if d is not None]

    def date(self, task: Task) -> TaskDate | None:
        """The value used for sorting and grouping: the earliest date."""
        return earliest_date(self._dates(task))

    # --- Filtering ---

    def filter_regexp(self) -> re.Pattern[str]:
        return self._filter_regexp

    def can_create_filter_for_line(self, line: str) -> bool:
        if self._instructions.can_create_filter_for_line(line):
            return True
        return super().can_create_filter_for_line(line)

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        result = self._instructions.create_filter_or_error(line)
        if result is not None:
            return result

        match = self._period_regexp.search(line)
        if match is not None:
            return self._create_period_filter(line, today, match.group(1), match.group(2))

        match = self._filter_regexp.search(line)
        if match is None:
            return QueryComponentOrError.from_error(
                line, f"do not understand query filter ({self.name} date)"
            )

        relation = match.group(1) or "on"
        boundary = parse_date(match.group(2), today)
        if boundary is None:
            return QueryComponentOrError.from_error(line, f"do not understand {self.name} date")

        compare = _COMPARISONS[relation]
        predicate = self._create_predicate(lambda value: compare(value, boundary))
        explanation = self.explanation_string(relation, format_explanation_date(boundary))
        return QueryComponentOrError.from_component(
            line, Filter(line, predicate, Explanation(explanation))
        )

    def _create_period_filter(
        self, line: str, today: date, relative: str, period: str
    ) -> FilterOrErrorMessage:
        start, end = period_boundaries(today, relative, period)
        predicate = self._create_predicate(lambda value: start <= value <= end)
        explanation = self.explanation_string(
            "between",
            f"{format_explanation_date(start)} and {format_explanation_date(end)} inclusive",
        )
        return QueryComponentOrError.from_component(
            line, Filter(line, predicate, Explanation(explanation))
        )

    def _create_predicate(self, test: Callable[[date], bool]) -> FilterFunction:
        """Apply `test` to the task's valid dates, honoring the missing-date policy."""

        def predicate(task: Task) -> bool:
            dates = self.present_dates(task)
            if not dates:
                return self.missing_matches
            return any(d.value is not None and test(d.value) for d in dates)

        return predicate

    def explanation_string(self, relation: str, described_date: str) -> str:
        """Explain a relational filter.

        For example: 'due date is before 2024-01-02 (Tuesday 2nd January 2024)'
        """
        result = f"{self.explanation_name} date is {relation} {described_date}"
        if self.missing_matches:
            result += f" OR no {self.name} date"
        return result

    # --- Sorting ---

    def supports_sorting(self) -> bool:
        return True

    def comparator(self, today: date) -> Comparator:
        return lambda a, b: compare_task_dates(self.date(a), self.date(b))

    # --- Grouping ---

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GrouperFunction:
        def classify(task: Task) -> list[str]:
            value = self.date(task)
            if value is None:
                return [f"No {self.name} date"]
            if value.value is None:
                return [f"Invalid {self.name} date"]
            return [format_group_date(value.value)]

        return classify


def create_date_fields() -> list[DateField]:
    """The date fields, in registration order."""
    return [
        DateField("created", lambda task: (task.created,)),
        DateField("done", lambda task: (task.done,)),
        DateField("due", lambda task: (task.due,)),
        DateField("scheduled", lambda task: (task.scheduled,)),
        # A task with no start date can be started at any time
        DateField(
            "start",
            lambda task: (task.start,),
            keywords=("starts", "start"),
            missing_matches=True,
        ),
        DateField(
            "happens",
            lambda task: task.happens_dates,
            explanation_name="due, start or scheduled",
        ),
    ]
