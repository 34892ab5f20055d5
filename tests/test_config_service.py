"""Tests for ConfigService and TaskQueryConfig."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from taskquery.config import TaskQueryConfig
from taskquery.services import ConfigService


@pytest.fixture
def task_dir(tmp_path: Path) -> Path:
    """Create a temporary task directory."""
    task_root = tmp_path / "tasks"
    task_root.mkdir()
    return task_root


class TestConfigServiceLoading:
    """Tests for ConfigService file loading."""

    def test_default_on_missing_file(self, task_dir: Path):
        """Missing taskquery.yml returns default config."""
        service = ConfigService(task_dir)
        config = service.get_config()

        assert config.global_query == ""
        assert config.global_filter == ""
        assert not service.has_config_error

    def test_load_valid_config(self, task_dir: Path):
        """A valid file is loaded."""
        (task_dir / "taskquery.yml").write_text(
            """
version: 1
global_filter: "#task"
global_query: |
  not done
status_alias:
  done: [x, complete]
ignore_paths: [templates/]
"""
        )

        service = ConfigService(task_dir)
        config = service.get_config()

        assert config.global_filter == "#task"
        assert config.global_query.strip() == "not done"
        assert config.resolve_status("X") == "done"
        assert config.is_ignored("templates/weekly.md")
        assert not service.has_config_error

    def test_global_values(self, task_dir: Path):
        """The service builds the global query and filter values."""
        (task_dir / "taskquery.yml").write_text('global_filter: "#task"\nglobal_query: has tags\n')

        service = ConfigService(task_dir)

        assert service.get_global_filter().tag == "#task"
        assert service.get_global_query().source == "has tags"

    def test_empty_file(self, task_dir: Path):
        """An empty file falls back to defaults with an error."""
        (task_dir / "taskquery.yml").write_text("")

        service = ConfigService(task_dir)
        config = service.get_config()

        assert config == TaskQueryConfig.default()
        assert service.config_error == "taskquery.yml is empty"

    def test_invalid_yaml(self, task_dir: Path):
        """Invalid YAML falls back to defaults with an error."""
        (task_dir / "taskquery.yml").write_text("global_query: [unclosed\n")

        service = ConfigService(task_dir)
        service.get_config()

        assert service.config_error.startswith("Invalid YAML in taskquery.yml")

    def test_invalid_values(self, task_dir: Path):
        """Values failing validation fall back to defaults with an error."""
        (task_dir / "taskquery.yml").write_text("status_alias:\n  someday: [later]\n")

        service = ConfigService(task_dir)
        config = service.get_config()

        assert config == TaskQueryConfig.default()
        assert service.config_error.startswith("Error loading taskquery.yml")

    def test_reload(self, task_dir: Path):
        """reload picks up changes."""
        service = ConfigService(task_dir)
        assert service.get_config().global_filter == ""

        (task_dir / "taskquery.yml").write_text('global_filter: "#task"\n')
        assert service.get_config().global_filter == ""

        service.reload()
        assert service.get_config().global_filter == "#task"


class TestTaskQueryConfig:
    """Tests for TaskQueryConfig validation and aliases."""

    def test_resolve_priority(self):
        """Priority aliases resolve; other values are lowercased."""
        config = TaskQueryConfig(priority_alias={"highest": ["urgent"]})
        assert config.resolve_priority("Urgent") == "highest"
        assert config.resolve_priority("HIGH") == "high"

    def test_alias_used_twice(self):
        """One alias cannot name two statuses."""
        with pytest.raises(ValidationError):
            TaskQueryConfig(status_alias={"done": ["x"], "cancelled": ["x"]})

    def test_alias_must_be_lowercase(self):
        """Aliases are lowercase."""
        with pytest.raises(ValidationError):
            TaskQueryConfig(status_alias={"done": ["X"]})
