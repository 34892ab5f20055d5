"""Configuration model for taskquery.yml."""

from pydantic import BaseModel, Field, field_validator

from ..models import Priority, TaskStatus

CONFIG_FILE = "taskquery.yml"


def _validate_aliases(aliases: dict[str, list[str]], allowed: list[str], kind: str) -> dict[str, list[str]]:
    """Check alias keys name a known value and aliases are unique lowercase words."""
    seen: dict[str, str] = {}
    for target, names in aliases.items():
        if target not in allowed:
            raise ValueError(f"Unknown {kind} '{target}'; expected one of: {', '.join(allowed)}")
        for name in names:
            if not name or name != name.lower():
                raise ValueError(f"{kind.capitalize()} alias '{name}' must be non-empty lowercase")
            if name in seen and seen[name] != target:
                raise ValueError(
                    f"{kind.capitalize()} alias '{name}' is used for both "
                    f"'{seen[name]}' and '{target}'"
                )
            seen[name] = target
    return aliases


class TaskQueryConfig(BaseModel):
    """Root configuration model for taskquery.yml.

    Example::

        global_filter: "#task"
        global_query: |
          not done
        status_alias:
          done: [x, complete]
        priority_alias:
          highest: [urgent]
        ignore_paths: [templates/]
    """

    version: int = Field(default=1, description="Schema version")
    global_query: str = Field(default="", description="Instructions prepended to every query")
    global_filter: str = Field(default="", description="Tag every task must carry")
    status_alias: dict[str, list[str]] = Field(default_factory=dict)
    priority_alias: dict[str, list[str]] = Field(default_factory=dict)
    ignore_paths: list[str] = Field(
        default_factory=list,
        description="Path prefixes, relative to the task root, that are not loaded",
    )

    @field_validator("status_alias")
    @classmethod
    def validate_status_alias(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        return _validate_aliases(v, [status.value for status in TaskStatus], "status")

    @field_validator("priority_alias")
    @classmethod
    def validate_priority_alias(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        return _validate_aliases(v, [priority.value for priority in Priority], "priority")

    @classmethod
    def default(cls) -> "TaskQueryConfig":
        return cls()

    def resolve_status(self, value: str) -> str:
        """Map a status alias to its canonical value; other values pass through."""
        lowered = value.lower()
        for status, aliases in self.status_alias.items():
            if lowered in aliases:
                return status
        return lowered

    def resolve_priority(self, value: str) -> str:
        """Map a priority alias to its canonical value; other values pass through."""
        lowered = value.lower()
        for priority, aliases in self.priority_alias.items():
            if lowered in aliases:
                return priority
        return lowered

    def is_ignored(self, relative_path: str) -> bool:
        return any(relative_path.startswith(prefix) for prefix in self.ignore_paths)
