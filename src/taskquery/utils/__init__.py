"""Utility functions."""

from .datetime import (
    as_date,
    format_explanation_date,
    format_group_date,
    ordinal,
    today_local,
)
from .strings import compare_natural, compare_values

__all__ = [
    "as_date",
    "compare_natural",
    "compare_values",
    "format_explanation_date",
    "format_group_date",
    "ordinal",
    "today_local",
]
