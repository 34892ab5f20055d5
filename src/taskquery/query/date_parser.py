"""Parsing of date expressions and relative periods.

Date expressions are resolved once, against a fixed "today", when a
query is compiled. Supported forms:

- ISO dates: 2024-01-31 (impossible dates such as 2024-02-30 are rejected)
- today, tomorrow, yesterday
- in 3 days, in 2 weeks, 1 month ago, 2 years ago
- monday, this friday, next tuesday, last sunday
- next week, last month, next year
- anything else python-dateutil can parse, e.g. "31 January 2024"
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")
OFFSET_PATTERN = re.compile(r"^in (\d+) (day|week|month|year)s?$")
AGO_PATTERN = re.compile(r"^(\d+) (day|week|month|year)s? ago$")
WEEKDAY_PATTERN = re.compile(
    r"^(?:(this|next|last) )?(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$"
)
RELATIVE_UNIT_PATTERN = re.compile(r"^(next|last) (week|month|year)$")

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
PERIODS = ("week", "month", "quarter", "year", "half")

# Length of each period in months; weeks are handled separately
_PERIOD_MONTHS = {"month": 1, "quarter": 3, "year": 12, "half": 6}


def _offset(unit: str, amount: int) -> relativedelta:
    """Build a relativedelta of `amount` units."""
    return relativedelta(**{f"{unit}s": amount})


def parse_date(text: str, today: date) -> date | None:
    """Parse a date expression relative to `today`.

    Args:
        text: The expression, e.g. "2024-01-31" or "next monday"
        today: The date that relative expressions are measured from

    Returns:
        The resolved date, or None if the expression is not understood
        or names an impossible calendar date
    """
    expression = text.strip().lower()
    if not expression:
        return None

    if ISO_DATE_PATTERN.match(expression):
        try:
            return datetime.strptime(expression, "%Y-%m-%d").date()
        except ValueError:
            logger.debug("Invalid calendar date: %s", expression)
            return None

    if expression == "today":
        return today
    if expression == "tomorrow":
        return today + timedelta(days=1)
    if expression == "yesterday":
        return today - timedelta(days=1)

    match = OFFSET_PATTERN.match(expression)
    if match:
        return today + _offset(match.group(2), int(match.group(1)))

    match = AGO_PATTERN.match(expression)
    if match:
        return today - _offset(match.group(2), int(match.group(1)))

    match = WEEKDAY_PATTERN.match(expression)
    if match:
        return _resolve_weekday(today, match.group(2), match.group(1))

    match = RELATIVE_UNIT_PATTERN.match(expression)
    if match:
        step = 1 if match.group(1) == "next" else -1
        return today + _offset(match.group(2), step)

    try:
        default = datetime(today.year, today.month, today.day)
        return date_parser.parse(text, default=default).date()
    except (ValueError, OverflowError):
        logger.debug("Could not parse date expression: %s", text)
        return None


def _resolve_weekday(today: date, weekday: str, qualifier: str | None) -> date:
    """Resolve a weekday name.

    A bare or 'this' weekday is the next such day, today included.
    'next' is strictly after today and 'last' strictly before it.
    """
    target = WEEKDAYS.index(weekday)
    if qualifier == "last":
        days_back = (today.weekday() - target) % 7 or 7
        return today - timedelta(days=days_back)
    days_ahead = (target - today.weekday()) % 7
    if qualifier == "next" and days_ahead == 0:
        days_ahead = 7
    return today + timedelta(days=days_ahead)


def _period_start(today: date, period: str) -> date:
    """First day of the period containing `today`."""
    if period == "week":
        # ISO 8601 weeks start on Monday, independent of locale
        return today - timedelta(days=today.weekday())
    if period == "month":
        return today.replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1)
    quarter_start = today.replace(month=3 * ((today.month - 1) // 3) + 1, day=1)
    if period == "quarter":
        return quarter_start
    # Half years are built from quarters: Q1 and Q3 begin a half,
    # Q2 and Q4 end one
    quarter = (today.month - 1) // 3 + 1
    if quarter in (1, 3):
        return quarter_start
    return quarter_start - relativedelta(months=3)


def period_boundaries(today: date, relative: str, period: str) -> tuple[date, date]:
    """Inclusive first and last day of a named period.

    Args:
        today: The reference date
        relative: "last", "this" or "next"
        period: One of week, month, quarter, year or half

    Returns:
        (start, end), both inclusive
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")
    shift = {"last": -1, "this": 0, "next": 1}[relative]

    start = _period_start(today, period)
    if period == "week":
        start += timedelta(weeks=shift)
        return start, start + timedelta(days=6)

    months = _PERIOD_MONTHS[period]
    start += relativedelta(months=months * shift)
    end = start + relativedelta(months=months) - timedelta(days=1)
    return start, end
