"""Tests for the grouping tree and task groups."""

from datetime import date

from taskquery.models import Task
from taskquery.query.components import Grouper
from taskquery.query.dispatcher import parse_grouper
from taskquery.query.grouping import TaskGroupingTree
from taskquery.query.task_groups import GroupDisplayHeading, GroupDisplayHeadingSelector, TaskGroups

TODAY = date(2022, 1, 15)


def grouper(line: str) -> Grouper:
    return parse_grouper(line, TODAY).component


def headings(task_groups: TaskGroups) -> list[list[tuple[int, str]]]:
    return [
        [(h.nesting_level, h.display_name) for h in group.display_headings]
        for group in task_groups.groups
    ]


class TestTaskGroupingTree:
    """Tests for TaskGroupingTree."""

    def test_no_groupers(self):
        """Without groupers all tasks are in the root."""
        tasks = [Task(description="a"), Task(description="b")]
        tree = TaskGroupingTree([], tasks)
        assert tree.generate_node_paths() == [([], tasks)]

    def test_paths_keep_task_order(self):
        """Leaves hold their tasks in input order."""
        a = Task(description="a", tags=["#x"])
        b = Task(description="b", tags=["#y"])
        c = Task(description="c", tags=["#x"])
        tree = TaskGroupingTree([grouper("group by tags")], [a, b, c])
        assert tree.generate_node_paths() == [(["#x"], [a, c]), (["#y"], [b])]

    def test_no_keys_uses_empty_key(self):
        """A task without keys is placed under the empty key."""
        task = Task(description="a")
        none_grouper = Grouper("nothing", lambda t: [])
        tree = TaskGroupingTree([none_grouper], [task])
        assert tree.generate_node_paths() == [([""], [task])]

    def test_arena_nodes(self):
        """Nodes are stored flat; children refer to them by index."""
        task = Task(description="a", tags=["#x", "#y"])
        tree = TaskGroupingTree([grouper("group by tags")], [task])
        assert len(tree.nodes) == 3
        assert tree.nodes[0].children == {"#x": 1, "#y": 2}


class TestTaskGroups:
    """Tests for TaskGroups."""

    def test_single_group_without_groupers(self):
        """No groupers gives one group with no headings."""
        tasks = [Task(description="a")]
        groups = TaskGroups([], tasks)
        assert len(groups.groups) == 1
        assert groups.groups[0].group_key_path == []
        assert groups.groups[0].display_headings == []
        assert groups.total_tasks_count() == 1

    def test_multiple_keys_replicate_task(self):
        """A task with two tags appears in two groups but counts once."""
        task = Task(description="a", tags=["#x", "#y"])
        groups = TaskGroups([grouper("group by tags")], [task])
        assert [g.group_key_path for g in groups.groups] == [["#x"], ["#y"]]
        assert all(g.tasks == [task] for g in groups.groups)
        assert groups.total_tasks_count() == 1

    def test_groups_sorted_naturally(self):
        """Group names sort naturally regardless of task order."""
        tasks = [Task(description=name, path=f"{name}.md") for name in ["f10", "f2", "F1"]]
        groups = TaskGroups([grouper("group by filename")], tasks)
        assert [g.group_key_path for g in groups.groups] == [["F1"], ["f2"], ["f10"]]

    def test_reverse(self):
        """A reverse grouper orders its groups backwards."""
        tasks = [Task(description=name, path=f"{name}.md") for name in ["a", "c", "b"]]
        groups = TaskGroups([grouper("group by filename reverse")], tasks)
        assert [g.group_key_path for g in groups.groups] == [["c"], ["b"], ["a"]]

    def test_reverse_applies_per_level(self):
        """Only the reversed level is reversed."""
        tasks = [
            Task(description="1", path="x/a.md"),
            Task(description="2", path="x/b.md"),
            Task(description="3", path="y/a.md"),
        ]
        groups = TaskGroups(
            [grouper("group by folder reverse"), grouper("group by filename")], tasks
        )
        assert [g.group_key_path for g in groups.groups] == [["y/", "a"], ["x/", "a"], ["x/", "b"]]

    def test_nested_headings(self):
        """Outer headings are shown once; inner headings repeat under a new parent."""
        tasks = [
            Task(description="1", path="x/a.md"),
            Task(description="2", path="x/b.md"),
            Task(description="3", path="y/a.md"),
        ]
        groups = TaskGroups([grouper("group by folder"), grouper("group by filename")], tasks)
        assert headings(groups) == [
            [(0, "x/"), (1, "a")],
            [(1, "b")],
            [(0, "y/"), (1, "a")],
        ]

    def test_empty_key_has_no_heading(self):
        """The empty key is never shown as a heading."""
        tasks = [Task(description="a"), Task(description="b", tags=["#x"])]
        tag_or_nothing = Grouper("tags", lambda t: list(t.tags))
        groups = TaskGroups([tag_or_nothing], tasks)
        assert headings(groups) == [[], [(0, "#x")]]

    def test_apply_task_limit(self):
        """The group limit truncates each group."""
        tasks = [Task(description=str(i), tags=["#x", "#y"]) for i in range(3)]
        groups = TaskGroups([grouper("group by tags")], tasks)
        groups.apply_task_limit(2)
        assert [len(g.tasks) for g in groups.groups] == [2, 2]
        assert groups.total_tasks_count() == 3

    def test_no_tasks(self):
        """Grouping no tasks gives one empty group without headings."""
        groups = TaskGroups([grouper("group by tags")], [])
        assert len(groups.groups) == 1
        assert groups.groups[0].group_key_path == []
        assert groups.groups[0].tasks == []
        assert groups.groups[0].display_headings == []
        assert groups.total_tasks_count() == 0

    def test_str(self):
        """The text form lists groupers, groups and the count."""
        task = Task(description="Mow lawn", tags=["#home"])
        groups = TaskGroups([grouper("group by tags reverse")], [task])
        assert str(groups) == (
            "Groupers (if any):\n"
            "- tags reverse\n"
            "Group names: [#home]\n"
            "#### #home\n"
            "- Mow lawn\n"
            "\n---\n"
            "\n1 tasks\n"
        )


class TestGroupDisplayHeadingSelector:
    """Tests for GroupDisplayHeadingSelector."""

    def test_three_levels(self):
        """A change at one level re-shows every deeper level."""
        selector = GroupDisplayHeadingSelector(3)
        assert selector.headings_for(["a", "b", "c"]) == [
            GroupDisplayHeading(0, "a"),
            GroupDisplayHeading(1, "b"),
            GroupDisplayHeading(2, "c"),
        ]
        assert selector.headings_for(["a", "b", "d"]) == [GroupDisplayHeading(2, "d")]
        assert selector.headings_for(["a", "e", "d"]) == [
            GroupDisplayHeading(1, "e"),
            GroupDisplayHeading(2, "d"),
        ]
