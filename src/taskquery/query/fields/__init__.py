"""Query fields.

Each field owns a family of instruction lines. The registry order
decides which field compiles a line when several could.
"""

from .backlink import BacklinkField
from .base import Field, FilterInstructions
from .boolean import BooleanField, LeafParser
from .dates import DateField, create_date_fields
from .function import FunctionField
from .priority import PriorityField
from .status import RecurringField, StatusField
from .tags import TagsField
from .text import TextField, create_text_fields
from .urgency import UrgencyField, calculate_urgency


def create_fields() -> list[Field]:
    """All fields except the boolean field, in registration order."""
    return [
        StatusField(),
        RecurringField(),
        *create_text_fields(),
        TagsField(),
        PriorityField(),
        *create_date_fields(),
        BacklinkField(),
        UrgencyField(),
        FunctionField(),
    ]


__all__ = [
    "BacklinkField",
    "BooleanField",
    "DateField",
    "Field",
    "FilterInstructions",
    "FunctionField",
    "LeafParser",
    "PriorityField",
    "RecurringField",
    "StatusField",
    "TagsField",
    "TextField",
    "UrgencyField",
    "calculate_urgency",
    "create_fields",
]
