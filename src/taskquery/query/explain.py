"""Combine a query block with the global query and explain the result."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from .query import Query

if TYPE_CHECKING:
    from ..config.global_query import GlobalFilter, GlobalQuery


def get_query_for_query_renderer(
    source: str,
    global_query: GlobalQuery,
    file_path: str | None = None,
    now: date | datetime | None = None,
) -> Query:
    """The query to run for a block: the global query followed by the block.

    The global query is left out when it is empty, or when the block
    contains 'ignore global query'.
    """
    query = Query(source, now=now, file_path=file_path)
    if query.ignore_global_query or global_query.is_empty():
        return query
    return Query(f"{global_query.source}\n{source}", now=now, file_path=file_path)


def explain_results(
    source: str,
    global_filter: GlobalFilter,
    global_query: GlobalQuery,
    file_path: str | None = None,
    now: date | datetime | None = None,
) -> str:
    """Explain everything that decides which tasks a block shows.

    For example, with a global filter and a global query::

        Only tasks containing the global filter '#task'.

        Explanation of the global query:

        description includes hello

        Explanation of this Tasks code block query:

        No filters supplied. All tasks will match the query.

    With neither, only the block's own explanation is returned.
    """
    sections: list[str] = []
    if not global_filter.is_empty():
        sections.append(global_filter.explanation())

    block_query = Query(source, now=now, file_path=file_path)
    if not global_query.is_empty() and not block_query.ignore_global_query:
        sections.append(
            f"Explanation of the global query:\n\n{global_query.query(now).explain_query()}"
        )

    if not sections:
        return block_query.explain_query()

    sections.append(
        f"Explanation of this Tasks code block query:\n\n{block_query.explain_query()}"
    )
    return "\n\n".join(sections)
