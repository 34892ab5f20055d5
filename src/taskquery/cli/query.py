"""Query command: run a query block against the tasks under the task root."""

import logging
from pathlib import Path

from ..config import GlobalFilter, GlobalQuery, Settings
from ..repositories import FilesystemRepository
from ..services import ConfigService, QueryService
from .output import error, info
from .render import render_result

logger = logging.getLogger(__name__)


def read_source(query: str | None, query_file: Path | None) -> str:
    """The query text: the file's contents when given, else the argument."""
    if query_file is not None:
        return query_file.read_text()
    return query or ""


def run_query(
    settings: Settings,
    source: str,
    file_path: str | None = None,
    explain: bool = False,
) -> int:
    """Run a query and print the rendered result.

    Returns:
        Exit code: 0 on success, 1 if the query or the search failed
    """
    config_service = ConfigService(settings.task_root)
    config_service.get_config()
    if config_service.has_config_error:
        info(f"Using default configuration: {config_service.config_error}")

    global_query = (
        GlobalQuery(source=settings.global_query) if settings.global_query is not None else None
    )
    global_filter = (
        GlobalFilter(tag=settings.global_filter) if settings.global_filter is not None else None
    )
    service = QueryService(
        FilesystemRepository(settings.task_root, config_service),
        config_service,
        global_query=global_query,
        global_filter=global_filter,
    )

    if explain:
        print(service.explain(source, file_path))
        return 0

    run = service.run(source, file_path)
    if run.result.error_message is not None:
        error(run.result.error_message)
        return 1

    explanation = None
    if run.query.layout_options.explain_query:
        explanation = service.explain(source, file_path)
    print(render_result(run.query, run.result, explanation), end="")
    return 0
