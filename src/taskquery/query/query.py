"""Compile a block of query instructions and apply it to tasks."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from functools import cmp_to_key

from ..models import Task
from ..utils import as_date
from .components import Filter, Grouper, QueryComponentOrError, Sorter
from .dispatcher import InstructionDispatcher
from .errors import SearchError
from .layout import LayoutOptions
from .placeholders import PlaceholderError, expand_placeholders
from .query_result import QueryResult
from .task_groups import TaskGroups

logger = logging.getLogger(__name__)

LIMIT_PATTERN = re.compile(r"^limit (?:to )?(\d+)(?: tasks?)?$")
LIMIT_GROUPS_PATTERN = re.compile(r"^limit groups (?:to )?(\d+)(?: tasks?)?$")
SORT_PATTERN = re.compile(r"^sort by ")
GROUP_PATTERN = re.compile(r"^group by ")

# Tie-breakers applied after any 'sort by' lines
DEFAULT_SORT_FIELDS = ("status", "urgency", "due", "priority", "path")

NO_FILTERS_EXPLANATION = "No filters supplied. All tasks will match the query."


def join_continuation_lines(source: str) -> list[str]:
    """Split the source into instruction lines.

    A line ending in a backslash continues on the next line. Lines are
    stripped; blank lines and comments starting with '#' are dropped.
    """
    lines: list[str] = []
    pending = ""
    for raw_line in source.splitlines():
        line = raw_line.strip()
        if line.endswith("\\"):
            pending += line[:-1].rstrip() + " "
            continue
        line = (pending + line).strip()
        pending = ""
        if line and not line.startswith("#"):
            lines.append(line)
    if pending.strip():
        lines.append(pending.strip())
    return lines


class Query:
    """A compiled query.

    Compilation happens in the constructor and never raises: errors are
    collected per instruction line and reported through `error`. Relative
    dates are resolved against `now`, so the same source and `now`
    always compile to the same query.
    """

    def __init__(
        self,
        source: str,
        now: date | datetime | None = None,
        file_path: str | None = None,
    ) -> None:
        self.source = source
        self.file_path = file_path
        self.today = as_date(now)

        self.filters: list[Filter] = []
        self.sorting: list[Sorter] = []
        self.grouping: list[Grouper] = []
        self.layout_options = LayoutOptions()
        self.limit: int | None = None
        self.task_group_limit: int | None = None
        self.ignore_global_query = False
        self._errors: list[str] = []

        self._dispatcher = InstructionDispatcher()
        self._default_sorters = self._create_default_sorters()

        try:
            expanded = expand_placeholders(source, file_path)
        except PlaceholderError as e:
            logger.info("Query placeholders could not be expanded: %s", e)
            self._errors.append(str(e))
            return

        for line in join_continuation_lines(expanded):
            self._parse_line(line)

    def _create_default_sorters(self) -> list[Sorter]:
        fields = {field.name: field for field in self._dispatcher.fields}
        return [fields[name].create_sorter(self.today) for name in DEFAULT_SORT_FIELDS]

    def _parse_line(self, line: str) -> None:
        logger.debug("Parsing query line: %s", line)

        if line == "explain":
            self.layout_options.explain_query = True
        elif line in ("short mode", "short"):
            self.layout_options.short_mode = True
        elif line in ("full mode", "full"):
            self.layout_options.short_mode = False
        elif line == "ignore global query":
            self.ignore_global_query = True
        elif self.layout_options.apply_hide_show(line):
            pass
        elif match := LIMIT_PATTERN.search(line):
            self.limit = int(match.group(1))
        elif match := LIMIT_GROUPS_PATTERN.search(line):
            self.task_group_limit = int(match.group(1))
        elif SORT_PATTERN.search(line):
            self._add_component(self._dispatcher.parse_sorter(line, self.today), self.sorting)
        elif GROUP_PATTERN.search(line):
            self._add_component(self._dispatcher.parse_grouper(line, self.today), self.grouping)
        else:
            self._add_component(self._dispatcher.parse_filter(line, self.today), self.filters)

    def _add_component(self, result: QueryComponentOrError, components: list) -> None:
        if result.component is not None:
            components.append(result.component)
            return
        logger.info("Invalid query line %r: %s", result.instruction, result.error)
        self._errors.append(f'{result.error} (problem line: "{result.instruction}")')

    @property
    def error(self) -> str | None:
        """All compile errors, one line per failing instruction, or None."""
        if not self._errors:
            return None
        return "\n".join(self._errors)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    def apply_query_to_tasks(self, tasks: list[Task]) -> QueryResult:
        """Filter, sort, limit and group the tasks.

        A query that failed to compile gives a result carrying its
        `query_error_message`, and a search that raised SearchError one
        carrying its `search_error_message`. Neither has any tasks.
        """
        if self.error is not None:
            return QueryResult.from_query_error(self.error)

        try:
            matching = [task for task in tasks if all(f.matches(task) for f in self.filters)]
            matching.sort(key=cmp_to_key(self._compare))
            if self.limit is not None:
                matching = matching[: self.limit]

            task_groups = TaskGroups(self.grouping, matching)
            if self.task_group_limit is not None:
                task_groups.apply_task_limit(self.task_group_limit)
        except SearchError as e:
            logger.warning("Search failed: %s", e)
            return QueryResult.from_search_error(str(e))

        logger.debug("Query matched %d of %d tasks", len(matching), len(tasks))
        return QueryResult(task_groups, task_groups.total_tasks_count())

    def _compare(self, a: Task, b: Task) -> int:
        for sorter in (*self.sorting, *self._default_sorters):
            result = sorter.compare(a, b)
            if result != 0:
                return result
        return 0

    def explain_query(self) -> str:
        """Describe the filters and limits of this query in plain text."""
        if self.error is not None:
            return f"Query has an error:\n{self.error}"

        if self.filters:
            sections = ["\n".join(f.explain_filter_indented("") for f in self.filters)]
        else:
            sections = [NO_FILTERS_EXPLANATION]

        if self.limit is not None:
            noun = "task" if self.limit == 1 else "tasks"
            sections.append(f"At most {self.limit} {noun}.")
        if self.task_group_limit is not None:
            noun = "task" if self.task_group_limit == 1 else "tasks"
            sections.append(f"At most {self.task_group_limit} {noun} per group.")
        return "\n\n".join(sections)
