"""Tests for date expressions and relative periods."""

from datetime import date

import pytest

from taskquery.query.date_parser import parse_date, period_boundaries

# A Saturday
TODAY = date(2022, 1, 15)


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self):
        """ISO dates parse to themselves."""
        assert parse_date("2022-01-31", TODAY) == date(2022, 1, 31)

    @pytest.mark.parametrize("text", ["2022-02-30", "2022-13-01", "2022-00-10"])
    def test_impossible_calendar_dates_rejected(self, text: str):
        """Dates that look ISO but do not exist are not understood."""
        assert parse_date(text, TODAY) is None

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("today", date(2022, 1, 15)),
            ("Today", date(2022, 1, 15)),
            ("tomorrow", date(2022, 1, 16)),
            ("yesterday", date(2022, 1, 14)),
        ],
    )
    def test_named_days(self, text: str, expected: date):
        """today, tomorrow and yesterday are relative to the given day."""
        assert parse_date(text, TODAY) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("in 3 days", date(2022, 1, 18)),
            ("in 1 week", date(2022, 1, 22)),
            ("in 1 month", date(2022, 2, 15)),
            ("2 weeks ago", date(2022, 1, 1)),
            ("1 year ago", date(2021, 1, 15)),
        ],
    )
    def test_offsets(self, text: str, expected: date):
        """'in N units' and 'N units ago' move from today."""
        assert parse_date(text, TODAY) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("monday", date(2022, 1, 17)),
            ("saturday", date(2022, 1, 15)),
            ("this saturday", date(2022, 1, 15)),
            ("next saturday", date(2022, 1, 22)),
            ("last saturday", date(2022, 1, 8)),
            ("last friday", date(2022, 1, 14)),
        ],
    )
    def test_weekdays(self, text: str, expected: date):
        """A bare weekday includes today; next and last exclude it."""
        assert parse_date(text, TODAY) == expected

    def test_next_and_last_units(self):
        """'next week' and 'last month' shift by one unit."""
        assert parse_date("next week", TODAY) == date(2022, 1, 22)
        assert parse_date("last month", TODAY) == date(2021, 12, 15)

    def test_free_form_dates(self):
        """Other formats are handed to dateutil."""
        assert parse_date("31 January 2022", TODAY) == date(2022, 1, 31)

    @pytest.mark.parametrize("text", ["", "   ", "whenever"])
    def test_unparseable(self, text: str):
        """Text that is not a date gives None."""
        assert parse_date(text, TODAY) is None


class TestPeriodBoundaries:
    """Tests for period_boundaries."""

    @pytest.mark.parametrize(
        ("relative", "period", "expected"),
        [
            ("this", "week", (date(2022, 1, 10), date(2022, 1, 16))),
            ("last", "week", (date(2022, 1, 3), date(2022, 1, 9))),
            ("next", "week", (date(2022, 1, 17), date(2022, 1, 23))),
            ("this", "month", (date(2022, 1, 1), date(2022, 1, 31))),
            ("last", "month", (date(2021, 12, 1), date(2021, 12, 31))),
            ("next", "month", (date(2022, 2, 1), date(2022, 2, 28))),
            ("this", "quarter", (date(2022, 1, 1), date(2022, 3, 31))),
            ("last", "quarter", (date(2021, 10, 1), date(2021, 12, 31))),
            ("next", "quarter", (date(2022, 4, 1), date(2022, 6, 30))),
            ("this", "year", (date(2022, 1, 1), date(2022, 12, 31))),
            ("last", "year", (date(2021, 1, 1), date(2021, 12, 31))),
            ("this", "half", (date(2022, 1, 1), date(2022, 6, 30))),
            ("last", "half", (date(2021, 7, 1), date(2021, 12, 31))),
            ("next", "half", (date(2022, 7, 1), date(2022, 12, 31))),
        ],
    )
    def test_periods(self, relative: str, period: str, expected: tuple[date, date]):
        """Periods are inclusive and weeks start on Monday."""
        assert period_boundaries(TODAY, relative, period) == expected

    @pytest.mark.parametrize(
        ("today", "expected"),
        [
            (date(2022, 5, 10), (date(2022, 1, 1), date(2022, 6, 30))),
            (date(2022, 8, 1), (date(2022, 7, 1), date(2022, 12, 31))),
            (date(2022, 11, 30), (date(2022, 7, 1), date(2022, 12, 31))),
        ],
    )
    def test_half_from_each_quarter(self, today: date, expected: tuple[date, date]):
        """Every quarter belongs to the half containing it."""
        assert period_boundaries(today, "this", "half") == expected

    def test_unknown_period(self):
        """Unknown periods are rejected."""
        with pytest.raises(ValueError):
            period_boundaries(TODAY, "this", "decade")
