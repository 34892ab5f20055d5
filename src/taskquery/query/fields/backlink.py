"""Backlink field: the location of a task, for grouping only."""

from __future__ import annotations

from ...models import Task
from ..components import GrouperFunction
from .base import Field

UNKNOWN_LOCATION = "Unknown Location"


class BacklinkField(Field):
    """Group tasks by 'file > heading'.

    Underscores in the file name are escaped so they are not rendered
    as markdown emphasis. The heading is left untouched.
    """

    name = "backlink"

    def value(self, task: Task) -> str:
        filename = task.filename
        if filename is None:
            return UNKNOWN_LOCATION

        escaped = filename.replace("_", "\\_")
        heading = task.heading
        if not heading or heading == filename:
            return escaped
        return f"{escaped} > {heading}"

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GrouperFunction:
        return lambda task: [self.value(task)]
