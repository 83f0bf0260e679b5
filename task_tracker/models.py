"""Task model and related types."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from task_tracker.exceptions import TaskValidationError


class Priority(Enum):
    """Task priority levels, ordered LOW < MEDIUM < HIGH."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        """Ordinal used for ordering (LOW=0, MEDIUM=1, HIGH=2)."""
        return _PRIORITY_RANKS[self]

    @property
    def label(self) -> str:
        """Title-cased name, e.g. ``High``."""
        return self.value.capitalize()

    @classmethod
    def from_string(cls, value: str) -> Priority:
        """Parse priority from string, case-insensitive."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            valid = ", ".join(p.value for p in cls)
            raise TaskValidationError(
                f"Invalid priority '{value}'. Must be one of: {valid}", "priority"
            ) from None


_PRIORITY_RANKS = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


def as_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive local time; naive values pass through.

    Tasks and filter bounds are compared with each other, so all of them use
    naive local time.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _new_id() -> uuid.UUID:
    return uuid.uuid4()


@dataclass(frozen=True)
class Task:
    """Immutable task representation.

    The repository owns the canonical copy. Changes are made by deriving a
    new instance with :meth:`with_updates` and handing it back to the
    repository, so ``id`` and ``created_at`` are carried over untouched.

    Attributes:
        title: Task title (required, never blank).
        description: Optional free-text description.
        priority: Task priority level.
        tags: Labels attached to the task, in display order.
        due_date: Optional due date.
        is_completed: Completion status.
        id: Unique task identifier, generated on construction.
        created_at: Creation timestamp, set on construction.
    """

    title: str
    description: Optional[str] = None
    priority: Priority = Priority.LOW
    tags: tuple[str, ...] = ()
    due_date: Optional[datetime] = None
    is_completed: bool = False
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        """Validate task data."""
        if not self.title or not self.title.strip():
            raise TaskValidationError("Title cannot be empty", "title")
        # Accept any iterable of tags but store a tuple so the task stays hashable.
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "due_date", as_local_naive(self.due_date))
        object.__setattr__(self, "created_at", as_local_naive(self.created_at))

    def with_updates(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        priority: Optional[Priority] = None,
        tags: Optional[Iterable[str]] = None,
        due_date: Optional[datetime] = None,
        is_completed: Optional[bool] = None,
    ) -> Task:
        """Create a new Task with updated fields; ``None`` keeps the current value."""
        return Task(
            id=self.id,
            created_at=self.created_at,
            title=title if title is not None else self.title,
            description=description if description is not None else self.description,
            priority=priority if priority is not None else self.priority,
            tags=tuple(tags) if tags is not None else self.tags,
            due_date=due_date if due_date is not None else self.due_date,
            is_completed=is_completed if is_completed is not None else self.is_completed,
        )


def parse_tags(value: str) -> list[str]:
    """Split a comma-separated tag string, dropping blanks."""
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def task_to_dict(task: Task) -> dict[str, Any]:
    """Convert a task to a JSON-compatible dict."""
    return {
        "id": str(task.id),
        "title": task.title,
        "description": task.description,
        "priority": task.priority.value,
        "tags": list(task.tags),
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "created_at": task.created_at.isoformat(),
        "is_completed": task.is_completed,
    }


def task_from_dict(data: dict[str, Any]) -> Task:
    """Build a task from a dict produced by :func:`task_to_dict`."""
    due_date = data.get("due_date")
    return Task(
        id=uuid.UUID(str(data["id"])),
        title=data["title"],
        description=data.get("description"),
        priority=Priority.from_string(data.get("priority", Priority.LOW.value)),
        tags=tuple(data.get("tags") or ()),
        due_date=datetime.fromisoformat(due_date) if due_date else None,
        created_at=datetime.fromisoformat(data["created_at"]),
        is_completed=bool(data.get("is_completed", False)),
    )
