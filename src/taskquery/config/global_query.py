"""Global query and global filter values.

Both are plain values handed to whoever renders a query, rather than
process-wide state.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from ..models import Task
from ..query.query import Query


class GlobalQuery(BaseModel):
    """Instructions prepended to every query unless it says 'ignore global query'."""

    model_config = ConfigDict(frozen=True)

    source: str = ""

    def is_empty(self) -> bool:
        return not self.source.strip()

    def query(self, now: date | datetime | None = None) -> Query:
        return Query(self.source, now=now)


class GlobalFilter(BaseModel):
    """A tag that every task must carry to be seen by queries, e.g. '#task'."""

    model_config = ConfigDict(frozen=True)

    tag: str = ""

    def is_empty(self) -> bool:
        return not self.tag.strip()

    def includes(self, task: Task) -> bool:
        """Whether the task passes the filter.

        Every task passes an empty filter. Otherwise the task must carry
        the tag, or mention it in its description as a whole word, so
        '#task' does not match '#taskforce'.
        """
        if self.is_empty():
            return True
        bare = self.tag.removeprefix("#")
        if any(tag.removeprefix("#") == bare for tag in task.tags):
            return True
        pattern = rf"(?<!\w){re.escape(self.tag)}(?!\w)"
        return re.search(pattern, task.description) is not None

    def explanation(self) -> str:
        return f"Only tasks containing the global filter '{self.tag}'."
