"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, read from TASKQUERY_* environment variables."""

    task_root: Path = Field(
        default=Path(),
        description="Directory containing task files and taskquery.yml",
    )

    global_query: str | None = Field(
        default=None,
        description="Instructions prepended to every query; overrides taskquery.yml",
    )

    global_filter: str | None = Field(
        default=None,
        description="Tag every task must carry; overrides taskquery.yml",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "TASKQUERY_",
    }
