"""The grouping tree: tasks split level by level by each grouper."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..models import Task
from .components import Grouper

ROOT = 0


@dataclass
class GroupingTreeNode:
    """One node of the tree.

    `tasks` holds the tasks matching the path from the root to this node,
    in the order they were added. `children` maps a group key to the id
    of the child node.
    """

    tasks: list[Task] = field(default_factory=list)
    children: dict[str, int] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class TaskGroupingTree:
    """Nodes are stored in a flat list and refer to each other by index.

    The tree is built once from the groupers and the (already sorted)
    tasks. Leaves are at depth ``len(groupers)``. The root is the only
    leaf when there are no groupers or no tasks.
    """

    def __init__(self, groupers: list[Grouper], tasks: list[Task]) -> None:
        self.nodes: list[GroupingTreeNode] = [GroupingTreeNode(tasks=list(tasks))]

        current_level = [ROOT]
        for grouper in groupers:
            next_level: list[int] = []
            for node_id in current_level:
                for task in self.nodes[node_id].tasks:
                    # A task with no keys still needs a group
                    keys = grouper.classify(task) or [""]
                    for key in keys:
                        child_id = self._child(node_id, key)
                        self.nodes[child_id].tasks.append(task)
                next_level.extend(self.nodes[node_id].children.values())
            current_level = next_level

    def _child(self, node_id: int, key: str) -> int:
        children = self.nodes[node_id].children
        child_id = children.get(key)
        if child_id is None:
            child_id = len(self.nodes)
            self.nodes.append(GroupingTreeNode())
            children[key] = child_id
        return child_id

    def generate_node_paths(self, node_id: int = ROOT) -> list[tuple[list[str], list[Task]]]:
        """Every path from the node to a leaf, with the leaf's tasks.

        The node's own key is not part of the paths.
        """
        paths: list[tuple[list[str], list[Task]]] = []
        stack: list[tuple[int, list[str]]] = [(node_id, [])]
        while stack:
            current, path = stack.pop()
            node = self.nodes[current]
            if node.is_leaf:
                paths.append((path, node.tasks))
                continue
            # Reversed so that children come out in insertion order
            for key, child_id in reversed(node.children.items()):
                stack.append((child_id, [*path, key]))
        return paths
