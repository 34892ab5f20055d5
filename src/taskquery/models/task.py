"""Task domain model."""

from datetime import date, datetime
from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Priority, TaskStatus

DATE_FORMAT = "%Y-%m-%d"


class TaskDate(BaseModel):
    """A date value as written on a task.

    The raw text is kept so that impossible dates (e.g. 30 February)
    stay visible to queries such as ``due date is invalid``.
    """

    model_config = ConfigDict(frozen=True)

    raw: str

    @property
    def value(self) -> date | None:
        """The calendar date, or None if the raw text is not a valid date."""
        text = self.raw
        # Allow a trailing time component, e.g. "2024-01-02T10:00"
        if len(text) > 10 and text[10] in "T ":
            text = text[:10]
        try:
            return datetime.strptime(text, DATE_FORMAT).date()
        except ValueError:
            return None

    @property
    def is_valid(self) -> bool:
        return self.value is not None

    @classmethod
    def coerce(cls, value: Any) -> "TaskDate | None":
        """Build a TaskDate from a string, date, datetime or TaskDate."""
        if value is None or isinstance(value, TaskDate):
            return value
        if isinstance(value, date):
            return cls(raw=value.strftime(DATE_FORMAT))
        text = str(value).strip()
        if not text:
            return None
        return cls(raw=text)

    def __str__(self) -> str:
        return self.raw


class Task(BaseModel):
    """Represents a single task record. Never mutated by the query engine."""

    model_config = ConfigDict(frozen=True)

    # Task identification
    description: str
    path: str = ""  # e.g. "projects/garden.md", empty when unknown
    line_number: int = 0
    heading: str | None = None  # Heading preceding the task in its file

    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.NONE
    recurrence: str | None = None  # e.g. "every week"
    tags: tuple[str, ...] = Field(default_factory=tuple)

    created: TaskDate | None = None
    start: TaskDate | None = None
    scheduled: TaskDate | None = None
    due: TaskDate | None = None
    done: TaskDate | None = None

    @field_validator("created", "start", "scheduled", "due", "done", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> TaskDate | None:
        """Accept plain strings and dates for date fields."""
        return TaskDate.coerce(v)

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> tuple[str, ...]:
        """Accept a single tag or any iterable of tags."""
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return tuple(str(tag) for tag in v)

    @property
    def identity(self) -> tuple[str, int]:
        """Unique location of the task: path plus line number."""
        return (self.path, self.line_number)

    @property
    def is_done(self) -> bool:
        return self.status.is_done

    @property
    def is_recurring(self) -> bool:
        return bool(self.recurrence)

    @property
    def happens_dates(self) -> tuple[TaskDate | None, TaskDate | None, TaskDate | None]:
        """Start, scheduled and due dates, any of which may be None."""
        return (self.start, self.scheduled, self.due)

    @property
    def filename(self) -> str | None:
        """File name without extension, or None if the location is unknown."""
        if not self.path:
            return None
        return PurePosixPath(self.path).stem

    @property
    def folder(self) -> str:
        """Folder containing the task's file, always with a trailing slash."""
        parent = str(PurePosixPath(self.path).parent)
        if parent in ("", "."):
            return "/"
        return f"{parent}/"

    @classmethod
    def from_frontmatter(
        cls,
        path: str,
        metadata: dict,
        body: str,
    ) -> "Task":
        """Create Task from parsed front matter."""
        description = metadata.get("description")
        if not description:
            # Fall back to the first body line, then the file name
            lines = body.strip().splitlines()
            description = lines[0] if lines else PurePosixPath(path).stem
        return cls(
            description=str(description),
            path=path,
            line_number=int(metadata.get("line", 0)),
            heading=metadata.get("heading"),
            status=metadata.get("status", TaskStatus.TODO),
            priority=metadata.get("priority", Priority.NONE),
            recurrence=metadata.get("recurrence"),
            tags=metadata.get("tags", ()),
            created=metadata.get("created"),
            start=metadata.get("start"),
            scheduled=metadata.get("scheduled"),
            due=metadata.get("due"),
            done=metadata.get("done"),
        )
