"""API dependencies for dependency injection."""

from datetime import datetime
from typing import Annotated

from fastapi import Depends, Query, Request

from task_tracker.cancellation import CancellationToken
from task_tracker.models import Priority
from task_tracker.queries import FilterTasksQuery, TaskQueryHandler
from task_tracker.repositories import TaskRepository
from task_tracker.service import TaskService
from task_tracker.sorting import SortField


def get_repository(request: Request) -> TaskRepository:
    """Get the repository created at application startup."""
    return request.app.state.repository


RepositoryDep = Annotated[TaskRepository, Depends(get_repository)]


def get_task_service(repository: RepositoryDep) -> TaskService:
    """Get task service instance."""
    return TaskService(repository)


def get_query_handler(repository: RepositoryDep) -> TaskQueryHandler:
    """Get query handler instance."""
    return TaskQueryHandler(repository)


async def get_cancel_token(request: Request) -> CancellationToken:
    """Get a cancellation token, already cancelled if the client went away."""
    token = CancellationToken()
    if await request.is_disconnected():
        token.cancel()
    return token


def get_filter_query(
    title: Annotated[str | None, Query(description="Title contains (case-insensitive)")] = None,
    description: Annotated[
        str | None, Query(description="Description contains (case-insensitive)")
    ] = None,
    is_completed: Annotated[bool | None, Query(description="Completion status")] = None,
    priority: Annotated[
        str | None, Query(description="Exact priority: LOW, MEDIUM or HIGH, any case")
    ] = None,
    tags: Annotated[
        list[str] | None, Query(description="Has at least one of these tags")
    ] = None,
    due_before: Annotated[datetime | None, Query(description="Due on or before")] = None,
    due_after: Annotated[datetime | None, Query(description="Due on or after")] = None,
    sort_by: Annotated[SortField | None, Query(description="Field to sort by")] = None,
    sort_descending: Annotated[bool, Query(description="Sort descending")] = False,
) -> FilterTasksQuery:
    """Collect filter and sort query parameters.

    An unknown priority raises ``TaskValidationError``, answered with 422.
    """
    return FilterTasksQuery(
        title=title,
        description=description,
        is_completed=is_completed,
        priority=Priority.from_string(priority) if priority is not None else None,
        tags=tuple(tags) if tags is not None else None,
        due_before=due_before,
        due_after=due_after,
        sort_by=sort_by,
        sort_descending=sort_descending,
    )


TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
QueryHandlerDep = Annotated[TaskQueryHandler, Depends(get_query_handler)]
CancelTokenDep = Annotated[CancellationToken, Depends(get_cancel_token)]
FilterQueryDep = Annotated[FilterTasksQuery, Depends(get_filter_query)]
