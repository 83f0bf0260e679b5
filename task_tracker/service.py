"""Business logic layer for task commands."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Optional
from uuid import UUID

from task_tracker.cancellation import CancellationToken, check_cancelled
from task_tracker.exceptions import TaskNotFoundError
from task_tracker.models import Priority, Task
from task_tracker.repositories.base import TaskRepository
from task_tracker.utils.logging import get_logger

logger = get_logger("service")


class TaskService:
    """Orchestrates task commands between the outer layers and the repository.

    Every mutation goes through ``repository.update`` (or ``add`` / ``delete``)
    followed by ``repository.save`` before it is returned to the caller.
    """

    def __init__(self, repository: TaskRepository) -> None:
        """Initialize service with a repository."""
        self._repo = repository

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        due_date: Optional[datetime] = None,
        priority: Priority = Priority.LOW,
        cancel_token: Optional[CancellationToken] = None,
    ) -> UUID:
        """Create and persist a new task, returning its ID."""
        check_cancelled(cancel_token, "create_task")

        task = Task(
            title=title,
            description=description,
            tags=tuple(tags or ()),
            due_date=due_date,
            priority=priority,
        )
        task_id = self._repo.add(task)
        self._repo.save()
        logger.info("Created task", extra={"task_id": str(task_id)})
        return task_id

    def get_task(
        self, task_id: UUID, cancel_token: Optional[CancellationToken] = None
    ) -> Task:
        """Get a task by ID."""
        check_cancelled(cancel_token, "get_task")
        task = self._repo.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def list_tasks(self) -> Sequence[Task]:
        """Get all tasks in repository order."""
        return self._repo.get_all()

    def update_task(
        self,
        task_id: UUID,
        title: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        due_date: Optional[datetime] = None,
        priority: Optional[Priority] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Task:
        """Update an existing task; ``None`` arguments keep the current value."""
        check_cancelled(cancel_token, "update_task")
        task = self.get_task(task_id)

        updated = task.with_updates(
            title=title,
            description=description,
            tags=tags,
            due_date=due_date,
            priority=priority,
        )
        self._repo.update(updated)
        self._repo.save()
        logger.info("Updated task", extra={"task_id": str(task_id)})
        return updated

    def complete_task(
        self,
        task_id: UUID,
        is_completed: bool = True,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Task:
        """Set the completion status of a task."""
        check_cancelled(cancel_token, "complete_task")
        task = self.get_task(task_id)

        updated = task.with_updates(is_completed=is_completed)
        self._repo.update(updated)
        self._repo.save()
        logger.info(
            "Set task completion",
            extra={"task_id": str(task_id), "is_completed": is_completed},
        )
        return updated

    def delete_task(
        self, task_id: UUID, cancel_token: Optional[CancellationToken] = None
    ) -> None:
        """Delete a task by ID."""
        check_cancelled(cancel_token, "delete_task")
        if self._repo.get_by_id(task_id) is None:
            raise TaskNotFoundError(task_id)
        self._repo.delete(task_id)
        self._repo.save()
        logger.info("Deleted task", extra={"task_id": str(task_id)})
