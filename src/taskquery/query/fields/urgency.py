"""Urgency: a score combining dates and priority, for sorting."""

from __future__ import annotations

from datetime import date

from ...models import Priority, Task
from ..components import Comparator
from .base import Field

DUE_COEFFICIENT = 12.0
SCHEDULED_COEFFICIENT = 5.0
STARTED_COEFFICIENT = -3.0
PRIORITY_COEFFICIENT = 6.0

_PRIORITY_MULTIPLIERS = {
    Priority.HIGHEST: 1.5,
    Priority.HIGH: 1.0,
    Priority.MEDIUM: 0.65,
    Priority.NONE: 0.325,
    Priority.LOW: 0.0,
    Priority.LOWEST: -0.3,
}


def calculate_urgency(task: Task, today: date) -> float:
    """Score how urgent a task is on the given day.

    Overdue tasks score highest on the due component, which ramps up from
    two weeks before the due date and saturates a week after it.
    """
    urgency = 0.0

    due = task.due.value if task.due else None
    if due is not None:
        days_overdue = (today - due).days
        if days_overdue >= 7:
            multiplier = 1.0
        elif days_overdue >= -14:
            multiplier = ((days_overdue + 14.0) * 0.8) / 21.0 + 0.2
        else:
            multiplier = 0.2
        urgency += multiplier * DUE_COEFFICIENT

    scheduled = task.scheduled.value if task.scheduled else None
    if scheduled is not None and today >= scheduled:
        urgency += SCHEDULED_COEFFICIENT

    start = task.start.value if task.start else None
    if start is not None and today < start:
        urgency += STARTED_COEFFICIENT

    urgency += _PRIORITY_MULTIPLIERS[task.priority] * PRIORITY_COEFFICIENT
    return urgency


class UrgencyField(Field):
    """Sort by urgency, most urgent first."""

    name = "urgency"

    def supports_sorting(self) -> bool:
        return True

    def comparator(self, today: date) -> Comparator:
        def compare(a: Task, b: Task) -> int:
            difference = calculate_urgency(b, today) - calculate_urgency(a, today)
            if difference > 0:
                return 1
            if difference < 0:
                return -1
            return 0

        return compare
