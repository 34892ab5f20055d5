"""Tests for boolean combinations of filters."""

from datetime import date

import pytest

from taskquery.models import Priority, Task, TaskStatus
from taskquery.query.dispatcher import parse_filter
from taskquery.query.fields.boolean import BooleanSyntaxError, tokenize

TODAY = date(2022, 1, 15)

HOME = Task(description="Mow lawn", tags=["#home"], due="2022-01-12")
WORK = Task(description="Write report", tags=["#work"], due="2022-01-12", priority=Priority.HIGH)
LATER = Task(description="Paint fence", tags=["#home"], due="2022-03-01")


def compile_filter(line: str):
    result = parse_filter(line, TODAY)
    assert result.component is not None, result.error
    return result.component


class TestBooleanEvaluation:
    """Tests for AND, OR, XOR and NOT."""

    def test_and(self):
        """AND needs every operand."""
        filter_ = compile_filter("(due this week) AND (tags include #home)")
        assert filter_.matches(HOME)
        assert not filter_.matches(WORK)
        assert not filter_.matches(LATER)

    def test_or(self):
        """OR needs at least one operand."""
        filter_ = compile_filter("(priority is high) OR (due after 2022-02-01)")
        assert filter_.matches(WORK)
        assert filter_.matches(LATER)
        assert not filter_.matches(HOME)

    def test_xor(self):
        """XOR needs exactly one operand."""
        filter_ = compile_filter("(due this week) XOR (tags include #home)")
        assert not filter_.matches(HOME)
        assert filter_.matches(WORK)
        assert filter_.matches(LATER)

    def test_not(self):
        """NOT negates its operand."""
        filter_ = compile_filter("NOT (tags include #home)")
        assert filter_.matches(WORK)
        assert not filter_.matches(HOME)

    def test_not_without_space(self):
        """NOT may be written directly before the parenthesis."""
        assert compile_filter("NOT(done)").matches(HOME)

    def test_and_not(self):
        """NOT can follow a binary operator."""
        filter_ = compile_filter("(due this week) AND NOT (tags include #home)")
        assert filter_.matches(WORK)
        assert not filter_.matches(HOME)

    def test_and_binds_tighter_than_or(self):
        """a OR b AND c is a OR (b AND c)."""
        filter_ = compile_filter(
            "(priority is high) OR (tags include #home) AND (due after 2022-02-01)"
        )
        assert filter_.matches(WORK)
        assert filter_.matches(LATER)
        assert not filter_.matches(HOME)

    def test_nested(self):
        """Parenthesised boolean expressions nest."""
        filter_ = compile_filter(
            "((tags include #home) OR (tags include #work)) AND (NOT (priority is high))"
        )
        assert filter_.matches(HOME)
        assert filter_.matches(LATER)
        assert not filter_.matches(WORK)

    def test_single_operand(self):
        """A single parenthesised filter is allowed."""
        assert compile_filter("(not done)").matches(HOME)
        assert not compile_filter("(not done)").matches(
            Task(description="x", status=TaskStatus.DONE)
        )

    def test_leaf_with_parentheses(self):
        """Balanced parentheses inside a filter belong to the filter."""
        task = Task(description="Call (mobile)")
        assert compile_filter("(description includes (mobile)) OR (done)").matches(task)


class TestBooleanErrors:
    """Tests for malformed boolean lines."""

    @pytest.mark.parametrize(
        "line",
        [
            "(done) AND",
            "(done) AND (not done",
            "(done) (not done)",
            "(done) AND AND (not done)",
            "(done) THEN (not done)",
            "()",
            "(done))",
        ],
    )
    def test_malformed(self, line: str):
        """A malformed expression is one error for the whole line."""
        result = parse_filter(line, TODAY)
        assert not result.is_valid
        assert result.error.startswith("malformed boolean query -- ")
        assert result.instruction == line

    def test_bad_leaf(self):
        """A leaf no field understands invalidates the line."""
        result = parse_filter("(done) AND (flying pigs)", TODAY)
        assert not result.is_valid
        assert "do not understand query: `flying pigs`" in result.error

    def test_bad_leaf_date(self):
        """A leaf with a bad date reports the date error."""
        result = parse_filter("(due before 2022-02-30) OR (done)", TODAY)
        assert "do not understand due date" in result.error


class TestTokenize:
    """Tests for tokenize."""

    def test_tokens(self):
        """Operands and operators are split apart."""
        tokens = tokenize("(a b) AND NOT(c)")
        assert [(t.kind, t.text) for t in tokens] == [
            ("operand", "a b"),
            ("operator", "AND"),
            ("operator", "NOT"),
            ("operand", "c"),
        ]

    def test_unbalanced(self):
        """Unclosed parentheses are rejected."""
        with pytest.raises(BooleanSyntaxError):
            tokenize("(a AND (b)")


class TestBooleanExplanation:
    """Tests for explanations of boolean filters."""

    def test_nested_explanation(self):
        """Each operand is explained beneath its operator."""
        line = "(due this week) AND NOT (tags include #home)"
        filter_ = compile_filter(line)
        assert filter_.explain_filter_indented() == "\n".join(
            [
                f"{line} =>",
                "  AND (All of):",
                "    due this week =>",
                "      due date is between 2022-01-10 (Monday 10th January 2022) and "
                "2022-01-16 (Sunday 16th January 2022) inclusive",
                "    NOT:",
                "      tags include #home",
            ]
        )

    def test_or_and_xor_headings(self):
        """OR and XOR have their own headings."""
        assert compile_filter("(done) OR (not done)").explanation.description == (
            "OR (At least one of):"
        )
        assert compile_filter("(done) XOR (not done)").explanation.description == (
            "XOR (Exactly one of):"
        )

    def test_chained_operator_is_flat(self):
        """a AND b AND c is a single AND with three operands."""
        filter_ = compile_filter("(done) AND (has tags) AND (no due date)")
        assert len(filter_.explanation.children) == 3
