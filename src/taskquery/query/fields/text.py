"""Text fields: description, path, folder, filename, heading and recurrence."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date

from ...models import Task
from ...utils import compare_natural
from ..components import (
    Comparator,
    Filter,
    FilterFunction,
    FilterOrErrorMessage,
    GrouperFunction,
    QueryComponentOrError,
)
from ..explanation import Explanation
from .base import Field

REGEX_LITERAL_PATTERN = re.compile(r"^/(.*)/([a-z]*)$")

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


def parse_regex(text: str) -> re.Pattern[str] | None:
    """Parse a /pattern/flags literal.

    Returns:
        The compiled pattern, or None if the text is not a valid
        regular expression literal
    """
    match = REGEX_LITERAL_PATTERN.match(text.strip())
    if match is None:
        return None
    flags = 0
    for flag in match.group(2):
        # 'u' and 'g' have no meaning here and are accepted silently
        flags |= _REGEX_FLAGS.get(flag, 0)
    try:
        return re.compile(match.group(1), flags)
    except re.error:
        return None


def regex_error(field_name: str) -> str:
    return (
        f"cannot parse regex ({field_name}); "
        "check your leading and trailing slashes for your query"
    )


def create_text_predicate(
    operator: str,
    argument: str,
    values: Callable[[Task], list[str]],
) -> FilterFunction | None:
    """Build a predicate testing any of a task's text values.

    Args:
        operator: includes, does not include, regex matches, regex does not match
        argument: Text to search for, or a /regex/ literal
        values: Extracts the text values to test from a task

    Returns:
        The predicate, or None if a regex argument is invalid
    """
    if operator.startswith("regex"):
        pattern = parse_regex(argument)
        if pattern is None:
            return None

        def matches(task: Task) -> bool:
            return any(pattern.search(value) for value in values(task))

    else:
        needle = argument.lower()

        def matches(task: Task) -> bool:
            return any(needle in value.lower() for value in values(task))

    if operator in ("includes", "include", "regex matches"):
        return matches
    return lambda task: not matches(task)


class TextField(Field):
    """A field over one text value of a task.

    Filtering is case-insensitive substring matching, or regular
    expression matching with the 'regex' operators.
    """

    OPERATORS = ("includes", "does not include", "regex matches", "regex does not match")

    def __init__(
        self,
        name: str,
        value: Callable[[Task], str],
        group_value: Callable[[Task], str] | None = None,
    ) -> None:
        self.name = name
        self._value = value
        self._group_value = group_value or value
        operators = "|".join(self.OPERATORS)
        self._regexp = re.compile(rf"^{re.escape(name)} ({operators}) (.*)$")

    def value(self, task: Task) -> str:
        return self._value(task)

    def filter_regexp(self) -> re.Pattern[str]:
        return self._regexp

    def create_filter_or_error(self, line: str, today: date) -> FilterOrErrorMessage:
        match = self._regexp.search(line)
        if match is None:
            return super().create_filter_or_error(line, today)

        predicate = create_text_predicate(
            match.group(1), match.group(2), lambda task: [self.value(task)]
        )
        if predicate is None:
            return QueryComponentOrError.from_error(line, regex_error(self.name))
        return QueryComponentOrError.from_component(
            line, Filter(line, predicate, Explanation(line))
        )

    def supports_sorting(self) -> bool:
        return True

    def comparator(self, today: date) -> Comparator:
        return lambda a, b: compare_natural(self.value(a), self.value(b))

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GrouperFunction:
        return lambda task: [self._group_value(task)]


def _path_without_extension(task: Task) -> str:
    if not task.path:
        return "Unknown Location"
    return task.path.removesuffix(".md")


def create_text_fields() -> list[TextField]:
    """The text fields, in registration order."""
    return [
        TextField("description", lambda task: task.description),
        TextField("path", lambda task: task.path, _path_without_extension),
        TextField("folder", lambda task: task.folder),
        TextField(
            "filename",
            lambda task: task.filename or "",
            lambda task: task.filename or "Unknown Location",
        ),
        TextField(
            "heading",
            lambda task: task.heading or "",
            lambda task: task.heading or "(No heading)",
        ),
        TextField(
            "recurrence",
            lambda task: task.recurrence or "",
            lambda task: task.recurrence or "None",
        ),
    ]
