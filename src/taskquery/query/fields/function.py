"""Custom filters, sorters and groupers written as Python expressions.

Examples::

    filter by function task.priority.rank <= 2 and not task.is_done
    sort by function len(task.description)
    group by function task.folder.split("/")[0] or "Top level"

The expression sees ``task`` and ``today``, the date the query was
compiled, plus a small set of builtins. Syntax errors are reported when
the query is compiled; failures while evaluating a task raise
SearchError, which stops that search.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from types import CodeType
from typing import Any

from ...models import Priority, Task, TaskStatus
from ...utils import compare_values
from ..components import (
    Filter,
    FilterOrErrorMessage,
    Grouper,
    GrouperOrErrorMessage,
    QueryComponentOrError,
    Sorter,
    SorterOrErrorMessage,
)
from ..errors import SearchError
from ..explanation import Explanation
from .base import Field, compare_by_presence

SAFE_BUILTINS: dict[str, Any] = {
    "abs": abs,
    "all": all,
    "any": any,
    "bool": bool,
    "float": float,
    "int": int,
    "len": len,
    "list": list,
    "max": max,
    "min": min,
    "round": round,
    "set": set,
    "sorted": sorted,
    "str": str,
    "sum": sum,
    "tuple": tuple,
}


class TaskExpression:
    """A compiled Python expression evaluated once per task."""

    def __init__(self, source: str, today: date) -> None:
        """
        Raises:
            SyntaxError: If the expression does not compile
        """
        self.source = source
        self._code: CodeType = compile(source, "<query function>", "eval")
        self._today = today

    def evaluate(self, task: Task) -> Any:
        namespace: dict[str, Any] = {
            "__builtins__": SAFE_BUILTINS,
            "task": task,
            "today": self._today,
            "date": date,
            "timedelta": timedelta,
            "Priority": Priority,
            "TaskStatus": TaskStatus,
        }
        try:
            return eval(self._code, namespace)  # noqa: S307
        except Exception as e:
            raise SearchError(
                f'Failed calculating expression "{self.source}". The error message was: {e}'
            ) from e


def _parse_error(source: str, error: SyntaxError) -> str:
    return f'Failed parsing expression "{source}". The error message was: {error.msg}'


class FunctionField(Field):
    """'filter by function', 'sort by function' and 'group by function'."""

    name = "function"

    _FILTER_REGEXP = re.compile(r"^filter by function (.*)$")
    _SORTER_REGEXP = re.compile(r"^sort by function( reverse)? (.*)$")
    _GROUPER_REGEXP = re.compile(r"^group by function( reverse)? (.*)$")

    # --- Filtering ---

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_REGEXP

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        match = self._FILTER_REGEXP.search(line)
        if match is None:
            return super().create_filter_or_error(line, today)

        source = match.group(1).strip()
        try:
            expression = TaskExpression(source, today)
        except SyntaxError as e:
            return QueryComponentOrError.from_error(line, _parse_error(source, e))

        def predicate(task: Task) -> bool:
            result = expression.evaluate(task)
            if not isinstance(result, bool):
                raise SearchError(
                    f'filtering function must return True or False. This returned "{result!r}".'
                )
            return result

        return QueryComponentOrError.from_component(
            line, Filter(line, predicate, Explanation(line))
        )

    # --- Sorting ---

    def supports_sorting(self) -> bool:
        return True

    def sorter_regexp(self) -> re.Pattern[str]:
        return self._SORTER_REGEXP

    def create_sorter_from_line(self, line: str, today: date) -> SorterOrErrorMessage | None:
        match = self._SORTER_REGEXP.search(line)
        if match is None:
            return None

        source = match.group(2).strip()
        try:
            expression = TaskExpression(source, today)
        except SyntaxError as e:
            return QueryComponentOrError.from_error(line, _parse_error(source, e))

        def compare(a: Task, b: Task) -> int:
            value_a = expression.evaluate(a)
            value_b = expression.evaluate(b)
            result = compare_by_presence(value_a, value_b)
            if result is not None:
                return result
            try:
                return compare_values(value_a, value_b)
            except TypeError as e:
                raise SearchError(
                    f'Cannot compare "{value_a!r}" and "{value_b!r}" from expression "{source}"'
                ) from e

        sorter = Sorter(self.name, compare, reverse=match.group(1) is not None)
        return QueryComponentOrError.from_component(line, sorter)

    # --- Grouping ---

    def supports_grouping(self) -> bool:
        return True

    def grouper_regexp(self) -> re.Pattern[str]:
        return self._GROUPER_REGEXP

    def create_grouper_from_line(self, line: str, today: date) -> GrouperOrErrorMessage | None:
        match = self._GROUPER_REGEXP.search(line)
        if match is None:
            return None

        source = match.group(2).strip()
        try:
            expression = TaskExpression(source, today)
        except SyntaxError as e:
            return QueryComponentOrError.from_error(line, _parse_error(source, e))

        def classify(task: Task) -> list[str]:
            result = expression.evaluate(task)
            if result is None:
                return []
            if isinstance(result, set):
                return sorted(str(value) for value in result)
            if isinstance(result, (list, tuple)):
                return [str(value) for value in result]
            return [str(result)]

        grouper = Grouper(self.name, classify, reverse=match.group(1) is not None)
        return QueryComponentOrError.from_component(line, grouper)
