"""Service layer for business logic."""

from .config_service import ConfigService
from .postponer import (
    PostponeError,
    create_postponed_task,
    get_date_field_to_postpone,
    postponement_success_message,
    should_show_postpone_button,
)
from .query_service import QueryRun, QueryService

__all__ = [
    "ConfigService",
    "PostponeError",
    "QueryRun",
    "QueryService",
    "create_postponed_task",
    "get_date_field_to_postpone",
    "postponement_success_message",
    "should_show_postpone_button",
]
