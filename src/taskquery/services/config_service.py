"""Configuration service for loading taskquery.yml."""

import logging
from pathlib import Path

import yaml

from ..config import CONFIG_FILE, GlobalFilter, GlobalQuery, TaskQueryConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching the taskquery.yml configuration."""

    def __init__(self, task_root: Path) -> None:
        """Initialize the config service.

        Args:
            task_root: Directory containing task files and taskquery.yml
        """
        self.task_root = task_root
        self._config: TaskQueryConfig | None = None
        self._config_error: str | None = None

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> TaskQueryConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_global_query(self) -> GlobalQuery:
        return GlobalQuery(source=self.get_config().global_query)

    def get_global_filter(self) -> GlobalFilter:
        return GlobalFilter(tag=self.get_config().global_filter)

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> TaskQueryConfig:
        """Load configuration from file or return default."""
        config_path = self.task_root / CONFIG_FILE
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return TaskQueryConfig.default()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)

            if data is None:
                self._config_error = f"{CONFIG_FILE} is empty"
                logger.warning(self._config_error)
                return TaskQueryConfig.default()

            config = TaskQueryConfig(**data)
            logger.info("Loaded %s", CONFIG_FILE)
            return config

        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return TaskQueryConfig.default()

        except Exception as e:
            self._config_error = f"Error loading {CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return TaskQueryConfig.default()
