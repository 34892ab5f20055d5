"""Task groups: the grouped, ordered output of a query."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cmp_to_key

from ..models import Task
from ..utils import compare_natural
from .components import Grouper
from .grouping import TaskGroupingTree


@dataclass(frozen=True)
class GroupDisplayHeading:
    """A heading to show above a group, at a nesting level starting at 0."""

    nesting_level: int
    display_name: str


class GroupDisplayHeadingSelector:
    """Decide which headings to show as the sorted groups are rendered.

    A heading is shown at a level when its key differs from the last key
    shown at that level. Showing a heading forgets the keys of all deeper
    levels, so they are shown again under the new parent. Empty keys are
    never shown.
    """

    def __init__(self, levels: int) -> None:
        self._last_keys: list[str | None] = [None] * levels

    def headings_for(self, group_key_path: list[str]) -> list[GroupDisplayHeading]:
        headings: list[GroupDisplayHeading] = []
        for level, key in enumerate(group_key_path):
            if key == self._last_keys[level]:
                continue
            self._last_keys[level] = key
            for deeper in range(level + 1, len(self._last_keys)):
                self._last_keys[deeper] = None
            if key:
                headings.append(GroupDisplayHeading(level, key))
        return headings


@dataclass
class TaskGroup:
    """The tasks sharing one path of group keys, with the headings to show."""

    group_key_path: list[str]
    tasks: list[Task]
    display_headings: list[GroupDisplayHeading] = field(default_factory=list)

    def apply_task_limit(self, limit: int) -> None:
        self.tasks = self.tasks[:limit]

    def __str__(self) -> str:
        lines = [f"Group names: [{','.join(self.group_key_path)}]"]
        for heading in self.display_headings:
            lines.append(f"{'#' * (4 + heading.nesting_level)} {heading.display_name}")
        for task in self.tasks:
            lines.append(f"- {task.description}")
        return "\n".join(lines) + "\n"


class TaskGroups:
    """All the groups of tasks produced by the 'group by' instructions.

    With no groupers, or no tasks, there is a single group with an empty
    key path.
    A task can appear in several groups, so the sum of the group sizes
    may exceed `total_tasks_count`.
    """

    def __init__(self, groupers: list[Grouper], tasks: list[Task]) -> None:
        """
        Args:
            groupers: One per 'group by' line, outermost first
            tasks: The tasks matching the query, already sorted
        """
        self.groupers = groupers
        self._total_tasks_count = len(tasks)

        tree = TaskGroupingTree(groupers, tasks)
        self.groups = [TaskGroup(path, node_tasks) for path, node_tasks in tree.generate_node_paths()]
        self.groups.sort(key=cmp_to_key(self._compare_groups))

        selector = GroupDisplayHeadingSelector(len(groupers))
        for group in self.groups:
            group.display_headings = selector.headings_for(group.group_key_path)

    def _compare_groups(self, a: TaskGroup, b: TaskGroup) -> int:
        for level, (key_a, key_b) in enumerate(zip(a.group_key_path, b.group_key_path)):
            result = compare_natural(key_a, key_b)
            if result != 0:
                return -result if self.groupers[level].reverse else result
        return 0

    def total_tasks_count(self) -> int:
        return self._total_tasks_count

    def apply_task_limit(self, limit: int) -> None:
        """Keep at most `limit` tasks in each group."""
        for group in self.groups:
            group.apply_task_limit(limit)

    def __str__(self) -> str:
        output = "Groupers (if any):\n"
        for grouper in self.groupers:
            reverse = " reverse" if grouper.reverse else ""
            output += f"- {grouper.property}{reverse}\n"
        for group in self.groups:
            output += str(group)
            output += "\n---\n"
        output += f"\n{self._total_tasks_count} tasks\n"
        return output
