"""Task endpoints."""

from enum import StrEnum
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from task_tracker.api.deps import (
    CancelTokenDep,
    FilterQueryDep,
    QueryHandlerDep,
    TaskServiceDep,
)
from task_tracker.api.schemas import TaskCreate, TaskIdResponse, TaskRead, TaskUpdate
from task_tracker.exceptions import TaskNotFoundError
from task_tracker.export import get_export_strategy
from task_tracker.queries import SearchTasksQuery


class ExportFormat(StrEnum):
    """Available export formats."""

    CSV = "csv"
    JSON = "json"
    MD = "md"


MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.JSON: "application/json",
    ExportFormat.MD: "text/markdown",
}

router = APIRouter()


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List tasks",
)
def list_tasks(handler: QueryHandlerDep, cancel_token: CancelTokenDep) -> list[TaskRead]:
    """Get every task in storage order."""
    return [TaskRead.model_validate(t) for t in handler.get_all(cancel_token)]


@router.get(
    "/filter",
    response_model=list[TaskRead],
    summary="Filter tasks",
    description="Filter tasks by any combination of fields and optionally sort them.",
)
def filter_tasks(
    query: FilterQueryDep,
    handler: QueryHandlerDep,
    cancel_token: CancelTokenDep,
) -> list[TaskRead]:
    """Filter and sort tasks.

    - **title** / **description**: case-insensitive substring
    - **is_completed**, **priority**: exact match
    - **tags**: repeatable; matches tasks with at least one of them
    - **due_before** / **due_after**: inclusive bounds; undated tasks never match
    - **sort_by**: title, priority, due_date, created_at, is_completed
    """
    return [TaskRead.model_validate(t) for t in handler.filter(query, cancel_token)]


@router.get(
    "/search",
    response_model=list[TaskRead],
    summary="Search tasks",
)
def search_tasks(
    handler: QueryHandlerDep,
    cancel_token: CancelTokenDep,
    search_term: Annotated[str, Query(description="Text to find in title or description")] = "",
) -> list[TaskRead]:
    """Find tasks whose title or description contains the search term."""
    tasks = handler.search(SearchTasksQuery(search_term), cancel_token)
    return [TaskRead.model_validate(t) for t in tasks]


@router.get(
    "/export",
    summary="Export tasks",
    response_class=Response,
)
def export_tasks(
    query: FilterQueryDep,
    handler: QueryHandlerDep,
    cancel_token: CancelTokenDep,
    fmt: Annotated[ExportFormat, Query(alias="format")] = ExportFormat.CSV,
) -> Response:
    """Export filtered and sorted tasks as a file download."""
    strategy = get_export_strategy(fmt.value)
    tasks = handler.filter(query, cancel_token)
    content = strategy.export(tasks, cancel_token)
    filename = f"tasks{strategy.file_extension}"
    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get task",
)
def get_task(task_id: UUID, handler: QueryHandlerDep, cancel_token: CancelTokenDep) -> TaskRead:
    """Get a single task by ID."""
    task = handler.get_by_id(task_id, cancel_token)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskRead.model_validate(task)


@router.post(
    "",
    response_model=TaskIdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
def create_task(
    data: TaskCreate,
    service: TaskServiceDep,
    cancel_token: CancelTokenDep,
    response: Response,
) -> TaskIdResponse:
    """Create a new task."""
    task_id = service.create_task(
        title=data.title,
        description=data.description,
        tags=data.tags,
        due_date=data.due_date,
        priority=data.priority,
        cancel_token=cancel_token,
    )
    response.headers["Location"] = f"/api/tasks/{task_id}"
    return TaskIdResponse(id=task_id)


@router.put(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update task",
)
def update_task(
    task_id: UUID,
    data: TaskUpdate,
    service: TaskServiceDep,
    cancel_token: CancelTokenDep,
) -> None:
    """Update a task; omitted fields keep their current value."""
    service.update_task(
        task_id,
        title=data.title,
        description=data.description,
        tags=data.tags,
        due_date=data.due_date,
        priority=data.priority,
        cancel_token=cancel_token,
    )


@router.put(
    "/{task_id}/complete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Complete task",
)
def complete_task(task_id: UUID, service: TaskServiceDep, cancel_token: CancelTokenDep) -> None:
    """Mark a task as completed."""
    service.complete_task(task_id, cancel_token=cancel_token)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete task",
)
def delete_task(task_id: UUID, service: TaskServiceDep, cancel_token: CancelTokenDep) -> None:
    """Delete a task."""
    service.delete_task(task_id, cancel_token=cancel_token)
