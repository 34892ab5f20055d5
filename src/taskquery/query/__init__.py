"""The query engine: compile instruction lines and apply them to tasks."""

from .components import (
    Filter,
    FilterOrErrorMessage,
    Grouper,
    GrouperOrErrorMessage,
    QueryComponentOrError,
    Sorter,
    SorterOrErrorMessage,
)
from .date_parser import parse_date, period_boundaries
from .dispatcher import InstructionDispatcher, parse_filter, parse_grouper, parse_sorter
from .errors import SearchError, TaskQueryError
from .explain import explain_results, get_query_for_query_renderer
from .explanation import Explanation
from .layout import HideOptions, LayoutOptions, TaskLayout
from .placeholders import PlaceholderError, expand_placeholders
from .query import Query
from .query_result import QueryResult
from .task_groups import GroupDisplayHeading, TaskGroup, TaskGroups

__all__ = [
    "Explanation",
    "Filter",
    "FilterOrErrorMessage",
    "GroupDisplayHeading",
    "Grouper",
    "GrouperOrErrorMessage",
    "HideOptions",
    "InstructionDispatcher",
    "LayoutOptions",
    "PlaceholderError",
    "Query",
    "QueryComponentOrError",
    "QueryResult",
    "SearchError",
    "Sorter",
    "SorterOrErrorMessage",
    "TaskGroup",
    "TaskGroups",
    "TaskLayout",
    "TaskQueryError",
    "expand_placeholders",
    "explain_results",
    "get_query_for_query_renderer",
    "parse_date",
    "parse_filter",
    "parse_grouper",
    "parse_sorter",
    "period_boundaries",
]
