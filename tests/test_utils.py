"""Tests for string and date helpers."""

from datetime import date, datetime
from functools import cmp_to_key

import pytest

from taskquery.utils import (
    as_date,
    compare_natural,
    compare_values,
    format_explanation_date,
    format_group_date,
    ordinal,
)


class TestCompareNatural:
    """Tests for compare_natural."""

    def test_numbers_compare_by_value(self):
        """'Item 2' sorts before 'Item 10'."""
        assert compare_natural("Item 2", "Item 10") < 0
        assert compare_natural("Item 10", "Item 2") > 0

    def test_case_insensitive_first(self):
        """Letters compare ignoring case before case breaks ties."""
        assert compare_natural("apple", "Banana") < 0
        assert compare_natural("Banana", "apple") > 0

    def test_lower_case_before_upper_case(self):
        """Strings differing only in case are ordered lower case first."""
        assert compare_natural("a", "A") < 0
        assert compare_natural("A", "a") > 0

    def test_equal(self):
        """Identical strings compare equal."""
        assert compare_natural("Priority 1", "Priority 1") == 0

    def test_sorting(self):
        """Sorting a list with the comparison gives human order."""
        values = ["file10", "File2", "file1", ""]
        assert sorted(values, key=cmp_to_key(compare_natural)) == ["", "file1", "File2", "file10"]


class TestCompareValues:
    """Tests for compare_values."""

    @pytest.mark.parametrize(("a", "b", "expected"), [(1, 2, -1), (2, 1, 1), ("x", "x", 0)])
    def test_three_way(self, a: object, b: object, expected: int):
        """Returns -1, 0 or 1."""
        assert compare_values(a, b) == expected


class TestDateFormatting:
    """Tests for date formatting helpers."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"), (22, "22nd")],
    )
    def test_ordinal(self, day: int, expected: str):
        """Day numbers get English suffixes."""
        assert ordinal(day) == expected

    def test_explanation_date(self):
        """Explanations show the date and its long form."""
        assert format_explanation_date(date(2024, 1, 2)) == "2024-01-02 (Tuesday 2nd January 2024)"

    def test_group_date(self):
        """Group headings show the date and weekday."""
        assert format_group_date(date(2024, 1, 2)) == "2024-01-02 Tuesday"

    def test_as_date(self):
        """Datetimes are reduced to dates; dates pass through."""
        assert as_date(datetime(2024, 1, 2, 15, 30)) == date(2024, 1, 2)
        assert as_date(date(2024, 1, 2)) == date(2024, 1, 2)
