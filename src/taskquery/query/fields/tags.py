"""Tags field."""

from __future__ import annotations

import re
from datetime import date

from ...models import Task
from ...utils import compare_natural
from ..components import (
    Comparator,
    Filter,
    FilterOrErrorMessage,
    GrouperFunction,
    QueryComponentOrError,
)
from ..explanation import Explanation
from .base import Field, FilterInstructions, compare_by_presence
from .text import create_text_predicate, regex_error

NO_TAGS_HEADING = "(No tags)"


def _strip_hash(tag: str) -> str:
    return tag.removeprefix("#")


class TagsField(Field):
    """Filter, sort and group by tags.

    A task with several tags is placed in one group per tag.
    """

    name = "tags"

    _REGEXP = re.compile(
        r"^(?:tags|tag) (includes|include|does not include|do not include"
        r"|regex matches|regex does not match) (.*)$"
    )

    def __init__(self) -> None:
        self._instructions = FilterInstructions()
        self._instructions.add("has tags", lambda task: len(task.tags) > 0)
        self._instructions.add("no tags", lambda task: len(task.tags) == 0)

    def filter_regexp(self) -> re.Pattern[str]:
        return self._REGEXP

    def can_create_filter_for_line(self, line: str) -> bool:
        return self._instructions.can_create_filter_for_line(line) or super().can_create_filter_for_line(
            line
        )

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        result = self._instructions.create_filter_or_error(line)
        if result is not None:
            return result

        match = self._REGEXP.search(line)
        if match is None:
            return super().create_filter_or_error(line, today)

        operator = match.group(1).replace("do not include", "does not include")
        argument = match.group(2)
        if operator.startswith("regex"):
            predicate = create_text_predicate(operator, argument, lambda task: list(task.tags))
        else:
            predicate = create_text_predicate(
                operator,
                _strip_hash(argument),
                lambda task: [_strip_hash(tag) for tag in task.tags],
            )
        if predicate is None:
            return QueryComponentOrError.from_error(line, regex_error(self.name))
        return QueryComponentOrError.from_component(
            line, Filter(line, predicate, Explanation(line))
        )

    def supports_sorting(self) -> bool:
        return True

    def sorter_regexp(self) -> re.Pattern[str]:
        return re.compile(r"^sort by (tags?)( reverse)?$")

    def comparator(self, today: date) -> Comparator:
        def compare(a: Task, b: Task) -> int:
            tag_a = a.tags[0] if a.tags else None
            tag_b = b.tags[0] if b.tags else None
            result = compare_by_presence(tag_a, tag_b)
            if result is not None:
                return result
            return compare_natural(_strip_hash(tag_a), _strip_hash(tag_b))

        return compare

    def supports_grouping(self) -> bool:
        return True

    def grouper_regexp(self) -> re.Pattern[str]:
        return re.compile(r"^group by (tags?)( reverse)?$")

    def grouper(self) -> GrouperFunction:
        def classify(task: Task) -> list[str]:
            if not task.tags:
                return [NO_TAGS_HEADING]
            # A repeated tag must not put the task in the same group twice
            return list(dict.fromkeys(task.tags))

        return classify
