"""Dispatch instruction lines to the field that understands them."""

from __future__ import annotations

import logging
from datetime import date

from .components import (
    FilterOrErrorMessage,
    GrouperOrErrorMessage,
    QueryComponentOrError,
    SorterOrErrorMessage,
)
from .fields import BooleanField, Field, create_fields

logger = logging.getLogger(__name__)


def unknown_instruction(line: str) -> str:
    return f"do not understand query: `{line}`"


class InstructionDispatcher:
    """An ordered registry of fields.

    Boolean combinations are checked before any other field. Otherwise
    the first field claiming a line compiles it, and a line no field
    claims is an error for that line only.
    """

    def __init__(self, fields: list[Field] | None = None) -> None:
        self.fields = fields if fields is not None else create_fields()
        self.boolean_field = BooleanField(self.parse_filter)

    def parse_filter(self, line: str, today: date) -> FilterOrErrorMessage:
        if self.boolean_field.can_create_filter_for_line(line):
            return self.boolean_field.create_filter_or_error(line, today)

        for field in self.fields:
            if field.can_create_filter_for_line(line):
                logger.debug("Field %s compiles filter: %s", field.name, line)
                return field.create_filter_or_error(line, today)

        return QueryComponentOrError.from_error(line, unknown_instruction(line))

    def parse_sorter(self, line: str, today: date) -> SorterOrErrorMessage:
        for field in self.fields:
            result = field.create_sorter_from_line(line, today)
            if result is not None:
                return result
        return QueryComponentOrError.from_error(line, unknown_instruction(line))

    def parse_grouper(self, line: str, today: date) -> GrouperOrErrorMessage:
        for field in self.fields:
            result = field.create_grouper_from_line(line, today)
            if result is not None:
                return result
        return QueryComponentOrError.from_error(line, unknown_instruction(line))


def parse_filter(line: str, today: date) -> FilterOrErrorMessage:
    """Compile one filter line with a fresh set of fields."""
    return InstructionDispatcher().parse_filter(line, today)


def parse_sorter(line: str, today: date) -> SorterOrErrorMessage:
    return InstructionDispatcher().parse_sorter(line, today)


def parse_grouper(line: str, today: date) -> GrouperOrErrorMessage:
    return InstructionDispatcher().parse_grouper(line, today)
