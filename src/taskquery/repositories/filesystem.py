"""Filesystem-based repository for reading tasks."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from ..config import TaskQueryConfig
from ..models import Task

if TYPE_CHECKING:
    from ..services.config_service import ConfigService

logger = logging.getLogger(__name__)

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class TaskYAMLLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates and timestamps as strings.

    TaskDate keeps the raw text, so impossible dates such as 2022-02-30
    are loaded and can be found with 'due date is invalid'.
    """


TaskYAMLLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class TaskFrontmatterHandler(YAMLHandler):
    """Front matter handler reading YAML with TaskYAMLLoader."""

    def load(self, fm: str, **kwargs: object) -> object:
        return yaml.load(fm, Loader=TaskYAMLLoader)


class FilesystemRepository:
    """
    Read-only repository for task files stored on the filesystem.

    Each .md file under the task root holds one task in its YAML front
    matter. The task's path is the file path relative to the task root.
    """

    def __init__(self, task_root: Path, config_service: ConfigService | None = None) -> None:
        """
        Initialize repository.

        Args:
            task_root: Directory to search for task files
            config_service: Optional config service for aliases and ignored paths
        """
        self.task_root = task_root
        self._config_service = config_service

    def _get_config(self) -> TaskQueryConfig:
        if self._config_service:
            return self._config_service.get_config()
        return TaskQueryConfig.default()

    def get_all(self) -> list[Task]:
        """Load and return all tasks, ordered by path."""
        if not self.task_root.exists():
            logger.warning("Task root %s does not exist", self.task_root)
            return []

        tasks = []
        for filepath in self._iter_task_files():
            task = self._parse_task_file(filepath)
            if task is not None:
                tasks.append(task)
        logger.info("Loaded %d tasks from %s", len(tasks), self.task_root)
        return tasks

    def get_by_path(self, relative_path: str) -> Task | None:
        """Load a single task by its path relative to the task root."""
        filepath = self.task_root / relative_path
        if not filepath.exists():
            return None
        return self._parse_task_file(filepath)

    def _iter_task_files(self) -> Iterator[Path]:
        """Iterate over .md files below the task root, skipping ignored paths."""
        config = self._get_config()
        for filepath in sorted(self.task_root.rglob("*.md")):
            if config.is_ignored(self._relative_path(filepath)):
                logger.debug("Ignoring %s", filepath)
                continue
            yield filepath

    def _relative_path(self, filepath: Path) -> str:
        return filepath.relative_to(self.task_root).as_posix()

    def _parse_task_file(self, filepath: Path) -> Task | None:
        """Parse a single task file, or return None if it cannot be read."""
        try:
            handler = TaskFrontmatterHandler()
            post = frontmatter.load(filepath, handler=handler)  # pyrefly: ignore[bad-argument-type]
            metadata = dict(post.metadata)

            # Normalize aliases before validation
            config = self._get_config()
            if isinstance(metadata.get("status"), str):
                metadata["status"] = config.resolve_status(metadata["status"])
            if isinstance(metadata.get("priority"), str):
                metadata["priority"] = config.resolve_priority(metadata["priority"])

            return Task.from_frontmatter(
                path=self._relative_path(filepath),
                metadata=metadata,
                body=post.content,
            )
        except Exception as e:
            logger.warning("Skipping unreadable task file %s: %s", filepath, e)
            return None
