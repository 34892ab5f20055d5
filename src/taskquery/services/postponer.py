"""Postponing a task's date by a fixed amount."""

from __future__ import annotations

from datetime import date
from typing import Literal

from dateutil.relativedelta import relativedelta

from ..models import Task, TaskDate
from ..query.errors import TaskQueryError

HappensDate = Literal["start", "scheduled", "due"]
TimeUnit = Literal["days", "weeks", "months", "years"]


class PostponeError(TaskQueryError):
    """Raised when a task's date cannot be postponed."""

    pass


def should_show_postpone_button(task: Task) -> bool:
    """Unfinished tasks with at least one valid start, scheduled or due date."""
    has_valid_date = any(d is not None and d.is_valid for d in task.happens_dates)
    return not task.is_done and has_valid_date


def get_date_field_to_postpone(task: Task) -> HappensDate | None:
    """The date to move: due, else scheduled, else start. None if none is set."""
    if task.due is not None:
        return "due"
    if task.scheduled is not None:
        return "scheduled"
    if task.start is not None:
        return "start"
    return None


def create_postponed_task(
    task: Task,
    field: HappensDate,
    unit: TimeUnit,
    amount: int,
) -> tuple[date, Task]:
    """Move one of the task's dates later by `amount` units.

    Returns:
        The new date and a copy of the task carrying it

    Raises:
        PostponeError: If the task has no valid value for the field
    """
    current: TaskDate | None = getattr(task, field)
    if current is None or current.value is None:
        raise PostponeError(f"Task has no valid {field} date to postpone")

    postponed = current.value + relativedelta(**{unit: amount})
    postponed_task = task.model_copy(update={field: TaskDate.coerce(postponed)})
    return postponed, postponed_task


def postponement_success_message(postponed_date: date, field: HappensDate) -> str:
    """e.g. "Task's due date postponed until 03 Jan 2024"."""
    return f"Task's {field} date postponed until {postponed_date.strftime('%d %b %Y')}"
