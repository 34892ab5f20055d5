"""The outcome of applying a query to a list of tasks."""

from __future__ import annotations

from dataclasses import dataclass

from .task_groups import TaskGroups


@dataclass(frozen=True)
class QueryResult:
    """Grouped tasks, or the error that stopped the query.

    A query that failed to compile reports its line errors in
    `query_error_message`. `search_error_message` is only set when
    evaluating the tasks raised SearchError.
    """

    task_groups: TaskGroups
    total_tasks_count: int
    search_error_message: str | None = None
    query_error_message: str | None = None

    @classmethod
    def from_search_error(cls, message: str) -> QueryResult:
        return cls(TaskGroups([], []), 0, search_error_message=message)

    @classmethod
    def from_query_error(cls, message: str) -> QueryResult:
        return cls(TaskGroups([], []), 0, query_error_message=message)

    @property
    def error_message(self) -> str | None:
        """The compile error or search error, whichever stopped the query."""
        return self.query_error_message or self.search_error_message

    def total_tasks_count_display_text(self) -> str:
        if self.total_tasks_count == 1:
            return "1 task"
        return f"{self.total_tasks_count} tasks"
