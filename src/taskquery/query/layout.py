"""Layout options set by 'short mode', 'hide ...' and 'show ...' lines."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

# Names used in 'hide <component>' and 'show <component>' lines
HIDE_COMPONENTS: dict[str, str] = {
    "task count": "task_count",
    "backlink": "backlinks",
    "backlinks": "backlinks",
    "priority": "priority",
    "created date": "created_date",
    "start date": "start_date",
    "scheduled date": "scheduled_date",
    "due date": "due_date",
    "done date": "done_date",
    "recurrence rule": "recurrence_rule",
    "edit button": "edit_button",
    "postpone button": "postpone_button",
    "urgency": "urgency",
}

HIDE_SHOW_PATTERN = re.compile(rf"^(hide|show) ({'|'.join(HIDE_COMPONENTS)})$")


class HideOptions(BaseModel):
    """Which parts of the output to leave out. Urgency is hidden unless shown."""

    task_count: bool = False
    backlinks: bool = False
    priority: bool = False
    created_date: bool = False
    start_date: bool = False
    scheduled_date: bool = False
    due_date: bool = False
    done_date: bool = False
    recurrence_rule: bool = False
    edit_button: bool = False
    postpone_button: bool = False
    urgency: bool = True


class LayoutOptions(BaseModel):
    short_mode: bool = False
    explain_query: bool = False
    hide_options: HideOptions = Field(default_factory=HideOptions)

    def apply_hide_show(self, line: str) -> bool:
        """Apply a 'hide <component>' or 'show <component>' line.

        Returns:
            True if the line was a hide/show instruction
        """
        match = HIDE_SHOW_PATTERN.search(line)
        if match is None:
            return False
        attribute = HIDE_COMPONENTS[match.group(2)]
        setattr(self.hide_options, attribute, match.group(1) == "hide")
        return True


DEFAULT_COMPONENTS = (
    "description",
    "priority",
    "recurrence_rule",
    "created_date",
    "start_date",
    "scheduled_date",
    "due_date",
    "done_date",
)


class TaskLayout:
    """The task components to render, after applying the layout options."""

    def __init__(
        self,
        options: LayoutOptions | None = None,
        components: tuple[str, ...] = DEFAULT_COMPONENTS,
    ) -> None:
        self.options = options or LayoutOptions()
        hide = self.options.hide_options
        self.hidden_components = [
            component
            for component in components
            if component != "description" and getattr(hide, component)
        ]
        self.components = [c for c in components if c not in self.hidden_components]

    @property
    def short_mode(self) -> bool:
        return self.options.short_mode
