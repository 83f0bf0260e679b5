"""Read-side handlers: filter, sort and search over the task collection.

Each call loads a fresh snapshot from the repository and never writes back,
so concurrent queries cannot interfere with each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from task_tracker.cancellation import CancellationToken, check_cancelled
from task_tracker.exceptions import OperationCancelledError
from task_tracker.filters import FilterCriteria, apply_filters
from task_tracker.models import Priority, Task
from task_tracker.repositories.base import TaskRepository
from task_tracker.search import search_tasks
from task_tracker.sorting import SortField, sort_tasks
from task_tracker.utils.logging import get_logger

logger = get_logger("queries")


@dataclass(frozen=True)
class FilterTasksQuery:
    """Filter and sort request; every field is optional."""

    title: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = None
    priority: Optional[Priority] = None
    tags: Optional[tuple[str, ...]] = None
    due_before: Optional[datetime] = None
    due_after: Optional[datetime] = None
    sort_by: Optional[SortField] = None
    sort_descending: bool = False

    def __post_init__(self) -> None:
        if self.tags is not None and not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            title=self.title,
            description=self.description,
            is_completed=self.is_completed,
            priority=self.priority,
            tags=self.tags,
            due_before=self.due_before,
            due_after=self.due_after,
        )


@dataclass(frozen=True)
class SearchTasksQuery:
    """Free-text search request."""

    search_term: str = ""


class TaskQueryHandler:
    """Answers read queries against a task repository."""

    def __init__(self, repository: TaskRepository) -> None:
        self._repo = repository

    def _begin(self, operation: str, cancel_token: Optional[CancellationToken]) -> None:
        try:
            check_cancelled(cancel_token, operation)
        except OperationCancelledError:
            logger.warning("Query cancelled before start", extra={"operation": operation})
            raise

    def _snapshot(self) -> list[Task]:
        return list(self._repo.get_all())

    def get_all(self, cancel_token: Optional[CancellationToken] = None) -> list[Task]:
        """Return every task in repository order."""
        self._begin("get_all", cancel_token)
        return self._snapshot()

    def get_by_id(
        self, task_id: UUID, cancel_token: Optional[CancellationToken] = None
    ) -> Optional[Task]:
        """Return the task with ``task_id``, or None."""
        self._begin("get_by_id", cancel_token)
        return self._repo.get_by_id(task_id)

    def filter(
        self, query: FilterTasksQuery, cancel_token: Optional[CancellationToken] = None
    ) -> list[Task]:
        """Apply the filter chain, then the sort if one was requested."""
        self._begin("filter", cancel_token)
        tasks = apply_filters(self._snapshot(), query.criteria)
        tasks = sort_tasks(tasks, query.sort_by, query.sort_descending)
        logger.debug(
            "Filtered tasks",
            extra={"result_count": len(tasks), "sort_by": query.sort_by},
        )
        return tasks

    def search(
        self, query: SearchTasksQuery, cancel_token: Optional[CancellationToken] = None
    ) -> list[Task]:
        """Match the search term against titles and descriptions."""
        self._begin("search", cancel_token)
        tasks = search_tasks(self._snapshot(), query.search_term)
        logger.debug("Searched tasks", extra={"result_count": len(tasks)})
        return tasks
