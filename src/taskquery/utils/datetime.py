"""Utilities for datetime handling."""

from datetime import date, datetime


def today_local() -> date:
    """Get the current local date."""
    return datetime.now().date()


def as_date(value: date | datetime | None) -> date:
    """Reduce a datetime to its date; None means today."""
    if value is None:
        return today_local()
    if isinstance(value, datetime):
        return value.date()
    return value


def ordinal(day: int) -> str:
    """Day of month with English suffix, e.g. 1st, 2nd, 11th, 23rd."""
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_explanation_date(value: date) -> str:
    """Format a date for explanations, e.g. '2024-01-02 (Tuesday 2nd January 2024)'."""
    return (
        f"{value.strftime('%Y-%m-%d')} "
        f"({value.strftime('%A')} {ordinal(value.day)} {value.strftime('%B %Y')})"
    )


def format_group_date(value: date) -> str:
    """Format a date for group headings, e.g. '2024-01-02 Tuesday'."""
    return value.strftime("%Y-%m-%d %A")
