"""Repository interface consumed by the query and command handlers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol
from uuid import UUID

from task_tracker.models import Task


class TaskRepository(Protocol):
    """Persistence abstraction for tasks.

    Implementations own the canonical copy of every task. ``add``, ``update``
    and ``delete`` stage changes; ``save`` makes them durable and visible to
    reads, or raises ``RepositoryError`` and drops them. Reads see committed
    tasks only and return a fresh list on every call.
    """

    def get_all(self) -> Sequence[Task]:
        """Retrieve all tasks."""
        ...

    def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Retrieve a task by ID, or None if not found."""
        ...

    def add(self, task: Task) -> UUID:
        """Stage a new task and return its ID."""
        ...

    def update(self, task: Task) -> None:
        """Stage a replacement for the task with the same ID."""
        ...

    def delete(self, task_id: UUID) -> None:
        """Stage removal of a task."""
        ...

    def save(self) -> None:
        """Commit staged changes, raising ``RepositoryError`` on failure."""
        ...
