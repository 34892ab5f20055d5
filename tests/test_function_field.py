"""Tests for filter, sort and group by function."""

from datetime import date
from functools import cmp_to_key

import pytest

from taskquery.models import Priority, Task, TaskStatus
from taskquery.query.dispatcher import parse_filter, parse_grouper, parse_sorter
from taskquery.query.errors import SearchError

TODAY = date(2022, 1, 15)


class TestFilterByFunction:
    """Tests for 'filter by function'."""

    def test_expression_sees_task(self):
        """The expression is evaluated with the task bound to 'task'."""
        filter_ = parse_filter("filter by function task.priority.rank <= 1", TODAY).component
        assert filter_.matches(Task(description="x", priority=Priority.HIGH))
        assert not filter_.matches(Task(description="x"))

    def test_expression_sees_today_and_enums(self):
        """today, date and the enums are available."""
        line = "filter by function task.due is not None and task.due.value < today"
        filter_ = parse_filter(line, TODAY).component
        assert filter_.matches(Task(description="x", due="2022-01-14"))
        assert not filter_.matches(Task(description="x", due="2022-01-15"))

        line = "filter by function task.status == TaskStatus.IN_PROGRESS"
        filter_ = parse_filter(line, TODAY).component
        assert filter_.matches(Task(description="x", status=TaskStatus.IN_PROGRESS))

    def test_syntax_error_is_line_error(self):
        """A syntax error is reported when the line is compiled."""
        result = parse_filter("filter by function task.description ==", TODAY)
        assert not result.is_valid
        assert result.error.startswith(
            'Failed parsing expression "task.description ==". The error message was: '
        )

    def test_runtime_error_raises_search_error(self):
        """An exception while evaluating raises SearchError."""
        filter_ = parse_filter("filter by function task.no_such_thing", TODAY).component
        with pytest.raises(SearchError, match="Failed calculating expression"):
            filter_.matches(Task(description="x"))

    def test_non_boolean_result_raises_search_error(self):
        """The expression must return True or False."""
        filter_ = parse_filter("filter by function task.description", TODAY).component
        with pytest.raises(SearchError, match="must return True or False"):
            filter_.matches(Task(description="x"))

    def test_restricted_builtins(self):
        """Only a small set of builtins is available."""
        filter_ = parse_filter("filter by function open('x') is None", TODAY).component
        with pytest.raises(SearchError):
            filter_.matches(Task(description="x"))

    def test_len_available(self):
        """Common builtins such as len work."""
        filter_ = parse_filter("filter by function len(task.tags) > 1", TODAY).component
        assert filter_.matches(Task(description="x", tags=["#a", "#b"]))


class TestSortByFunction:
    """Tests for 'sort by function'."""

    def test_sort(self):
        """Tasks sort by the expression's value."""
        tasks = [Task(description="ccc"), Task(description="a"), Task(description="bb")]
        sorter = parse_sorter("sort by function len(task.description)", TODAY).component
        ordered = sorted(tasks, key=cmp_to_key(sorter.compare))
        assert [t.description for t in ordered] == ["a", "bb", "ccc"]

    def test_sort_reverse(self):
        """reverse comes before the expression."""
        result = parse_sorter("sort by function reverse len(task.description)", TODAY)
        assert result.component.reverse

    def test_none_sorts_last(self):
        """Tasks where the expression gives None sort last."""
        tasks = [Task(description="none"), Task(description="due", due="2022-01-01")]
        sorter = parse_sorter("sort by function task.due.value if task.due else None", TODAY)
        ordered = sorted(tasks, key=cmp_to_key(sorter.component.compare))
        assert [t.description for t in ordered] == ["due", "none"]

    def test_incomparable_values(self):
        """Values of different types raise SearchError."""
        sorter = parse_sorter(
            "sort by function 1 if task.description == 'a' else 'b'", TODAY
        ).component
        with pytest.raises(SearchError, match="Cannot compare"):
            sorter.compare(Task(description="a"), Task(description="b"))

    def test_syntax_error(self):
        """A syntax error is reported for the line."""
        result = parse_sorter("sort by function (", TODAY)
        assert result.error.startswith('Failed parsing expression "("')


class TestGroupByFunction:
    """Tests for 'group by function'."""

    def test_single_key(self):
        """A scalar result is one group name."""
        grouper = parse_grouper("group by function task.folder", TODAY).component
        assert grouper.classify(Task(description="x", path="a/b.md")) == ["a/"]

    def test_list_gives_several_groups(self):
        """A list result places the task in several groups."""
        grouper = parse_grouper("group by function [t.upper() for t in task.tags]", TODAY)
        task = Task(description="x", tags=["#a", "#b"])
        assert grouper.component.classify(task) == ["#A", "#B"]

    def test_none_gives_no_group(self):
        """None means the task has no group key."""
        grouper = parse_grouper("group by function None", TODAY).component
        assert grouper.classify(Task(description="x")) == []

    def test_numbers_converted_to_text(self):
        """Group names are always text."""
        grouper = parse_grouper("group by function task.priority.rank", TODAY).component
        assert grouper.classify(Task(description="x")) == ["3"]

    def test_reverse(self):
        """group by function reverse sets the grouper to reverse."""
        result = parse_grouper("group by function reverse task.folder", TODAY)
        assert result.component.reverse
