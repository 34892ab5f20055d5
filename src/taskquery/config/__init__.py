"""Configuration: settings, the taskquery.yml model and global query values."""

from .global_query import GlobalFilter, GlobalQuery
from .settings import Settings
from .taskquery_config import CONFIG_FILE, TaskQueryConfig

__all__ = [
    "CONFIG_FILE",
    "GlobalFilter",
    "GlobalQuery",
    "Settings",
    "TaskQueryConfig",
]
