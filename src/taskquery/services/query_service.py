"""Service running queries against the tasks in a repository."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from ..config import GlobalFilter, GlobalQuery
from ..query import Query, QueryResult, explain_results, get_query_for_query_renderer

if TYPE_CHECKING:
    from ..repositories import FilesystemRepository
    from .config_service import ConfigService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryRun:
    """A compiled query and the result of applying it."""

    query: Query
    result: QueryResult


class QueryService:
    """Apply query blocks to the tasks of a repository.

    The global query and global filter come from taskquery.yml unless
    given explicitly.
    """

    def __init__(
        self,
        repository: FilesystemRepository,
        config_service: ConfigService,
        global_query: GlobalQuery | None = None,
        global_filter: GlobalFilter | None = None,
    ) -> None:
        self.repository = repository
        self.config_service = config_service
        self._global_query = global_query
        self._global_filter = global_filter

    @property
    def global_query(self) -> GlobalQuery:
        if self._global_query is not None:
            return self._global_query
        return self.config_service.get_global_query()

    @property
    def global_filter(self) -> GlobalFilter:
        if self._global_filter is not None:
            return self._global_filter
        return self.config_service.get_global_filter()

    def run(
        self,
        source: str,
        file_path: str | None = None,
        now: date | datetime | None = None,
    ) -> QueryRun:
        """Compile the block with the global query and apply it to all tasks."""
        query = get_query_for_query_renderer(source, self.global_query, file_path, now)
        if query.error is not None:
            logger.info("Query has errors:\n%s", query.error)
            return QueryRun(query, QueryResult.from_query_error(query.error))

        global_filter = self.global_filter
        tasks = [task for task in self.repository.get_all() if global_filter.includes(task)]
        return QueryRun(query, query.apply_query_to_tasks(tasks))

    def explain(
        self,
        source: str,
        file_path: str | None = None,
        now: date | datetime | None = None,
    ) -> str:
        return explain_results(source, self.global_filter, self.global_query, file_path, now)
