"""Enums for task status and priority."""

from enum import Enum


class TaskStatus(str, Enum):
    """Valid statuses for a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELLED = "cancelled"

    @property
    def is_done(self) -> bool:
        """Done and cancelled tasks are both finished."""
        return self in (TaskStatus.DONE, TaskStatus.CANCELLED)


class Priority(str, Enum):
    """Priority levels for tasks, declared from most to least important."""

    HIGHEST = "highest"
    HIGH = "high"
    MEDIUM = "medium"
    NONE = "none"
    LOW = "low"
    LOWEST = "lowest"

    @property
    def rank(self) -> int:
        """Position in importance order: 0 for highest, 5 for lowest."""
        return list(Priority).index(self)

    @property
    def display_name(self) -> str:
        """Name used in group headings and explanations."""
        if self is Priority.NONE:
            return "No"
        return self.value.capitalize()
