"""Data models."""

from .enums import Priority, TaskStatus
from .task import DATE_FORMAT, Task, TaskDate

__all__ = [
    "DATE_FORMAT",
    "Priority",
    "Task",
    "TaskDate",
    "TaskStatus",
]
