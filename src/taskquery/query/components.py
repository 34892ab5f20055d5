"""Compiled query components: filters, sorters and groupers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..models import Task
from .explanation import Explanation

FilterFunction = Callable[[Task], bool]
Comparator = Callable[[Task, Task], int]
GrouperFunction = Callable[[Task], list[str]]

T = TypeVar("T")


@dataclass(frozen=True)
class Filter:
    """A predicate compiled from one instruction line."""

    instruction: str
    predicate: FilterFunction
    explanation: Explanation

    def matches(self, task: Task) -> bool:
        return self.predicate(task)

    def explain_filter_indented(self, indent: str = "") -> str:
        """Explain this filter, prefixed by its instruction when they differ.

        For example::

            due before 2023-01-02 =>
              due date is before 2023-01-02 (Monday 2nd January 2023)
        """
        if self.explanation.description == self.instruction and not self.explanation.children:
            return f"{indent}{self.instruction}"
        return f"{indent}{self.instruction} =>\n{self.explanation.as_string(indent + '  ')}"


@dataclass(frozen=True)
class Sorter:
    """A comparator for one 'sort by' key.

    The comparator returns a negative number when the first task sorts
    before the second, zero when equal and a positive number otherwise.
    """

    property: str
    comparator: Comparator
    reverse: bool = False

    def compare(self, a: Task, b: Task) -> int:
        result = self.comparator(a, b)
        return -result if self.reverse else result


@dataclass(frozen=True)
class Grouper:
    """A classifier for one 'group by' level.

    The classify function may return several keys for a task, in which
    case the task is shown in several groups.
    """

    property: str
    classify: GrouperFunction
    reverse: bool = False


@dataclass(frozen=True)
class QueryComponentOrError(Generic[T]):
    """An instruction line and either its compiled component or an error."""

    instruction: str
    component: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.component is None) == (self.error is None):
            raise ValueError("Exactly one of component and error must be set")

    @classmethod
    def from_component(cls, instruction: str, component: T) -> QueryComponentOrError[T]:
        return cls(instruction=instruction, component=component)

    @classmethod
    def from_error(cls, instruction: str, error: str) -> QueryComponentOrError[T]:
        return cls(instruction=instruction, error=error)

    @property
    def is_valid(self) -> bool:
        return self.component is not None


FilterOrErrorMessage = QueryComponentOrError[Filter]
SorterOrErrorMessage = QueryComponentOrError[Sorter]
GrouperOrErrorMessage = QueryComponentOrError[Grouper]

