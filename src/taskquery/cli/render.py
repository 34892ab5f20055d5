"""Render query results as markdown."""

from __future__ import annotations

from datetime import date

from ..models import Priority, Task, TaskStatus
from ..query import Query, QueryResult, TaskLayout
from ..query.fields import BacklinkField, calculate_urgency

STATUS_SYMBOLS = {
    TaskStatus.TODO: " ",
    TaskStatus.IN_PROGRESS: "/",
    TaskStatus.DONE: "x",
    TaskStatus.CANCELLED: "-",
}

PRIORITY_SYMBOLS = {
    Priority.HIGHEST: "🔺",
    Priority.HIGH: "⏫",
    Priority.MEDIUM: "🔼",
    Priority.NONE: "",
    Priority.LOW: "🔽",
    Priority.LOWEST: "⏬",
}

# Component name, task attribute and signifier
DATE_COMPONENTS = (
    ("created_date", "created", "➕"),
    ("start_date", "start", "🛫"),
    ("scheduled_date", "scheduled", "⏳"),
    ("due_date", "due", "📅"),
    ("done_date", "done", "✅"),
)
RECURRENCE_SIGNIFIER = "🔁"


def heading_prefix(nesting_level: int) -> str:
    """Markdown heading marks: #### for level 0, ##### for 1, ###### below that."""
    return "#" * min(4 + nesting_level, 6)


def render_task_line(task: Task, layout: TaskLayout, today: date) -> str:
    """Render one task as a markdown list item.

    In short mode only the signifiers are shown, not the values.
    """
    parts = [f"- [{STATUS_SYMBOLS[task.status]}] {task.description}"]
    components = layout.components
    short = layout.short_mode

    if "priority" in components and PRIORITY_SYMBOLS[task.priority]:
        parts.append(PRIORITY_SYMBOLS[task.priority])
    if "recurrence_rule" in components and task.recurrence:
        parts.append(RECURRENCE_SIGNIFIER if short else f"{RECURRENCE_SIGNIFIER} {task.recurrence}")
    for component, attribute, signifier in DATE_COMPONENTS:
        value = getattr(task, attribute)
        if component in components and value is not None:
            parts.append(signifier if short else f"{signifier} {value}")

    hide = layout.options.hide_options
    if not hide.urgency:
        parts.append(f"[urgency:: {calculate_urgency(task, today):.2f}]")
    if not hide.backlinks and task.path:
        parts.append(f"({BacklinkField().value(task)})")
    return " ".join(parts)


def render_result(
    query: Query,
    result: QueryResult,
    explanation: str | None = None,
) -> str:
    """Render a query result: optional explanation, groups, then the task count.

    Args:
        query: The compiled query, for its layout options
        result: The result of applying the query
        explanation: Text shown first in a code block, when the query
            asked to be explained
    """
    if result.error_message is not None:
        return f"Tasks query: {result.error_message}\n"

    lines: list[str] = []
    if explanation is not None and query.layout_options.explain_query:
        lines.extend(["```", explanation, "```", ""])

    layout = TaskLayout(query.layout_options)
    for group in result.task_groups.groups:
        for heading in group.display_headings:
            lines.append(f"{heading_prefix(heading.nesting_level)} {heading.display_name}")
            lines.append("")
        for task in group.tasks:
            lines.append(render_task_line(task, layout, query.today))
        if group.tasks:
            lines.append("")

    if not layout.options.hide_options.task_count:
        lines.append(result.total_tasks_count_display_text())
    return "\n".join(lines) + "\n"
