"""
CLI for the task tracker.

Provides commands for creating, listing, filtering, searching and
exporting tasks.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from uuid import UUID

import typer
from rich.console import Console

from task_tracker.config import get_settings
from task_tracker.display import task_detail, tasks_table
from task_tracker.exceptions import TaskTrackerError
from task_tracker.export import ExportService, get_export_strategy
from task_tracker.models import Priority, parse_tags
from task_tracker.queries import FilterTasksQuery, SearchTasksQuery, TaskQueryHandler
from task_tracker.repositories import TaskRepository, create_repository
from task_tracker.service import TaskService
from task_tracker.sorting import SortField
from task_tracker.utils.logging import setup_logging

app = typer.Typer(
    name="task-tracker",
    help="Track tasks: create, update, complete, filter, search and export.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Configure logging before any command runs."""
    settings = get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
    )


def _repository() -> TaskRepository:
    return create_repository(get_settings())


def _fail(error: Exception) -> typer.Exit:
    console.print(f"[red]✗ {error}[/red]")
    return typer.Exit(1)


def _tags_option(tags: list[str] | None) -> tuple[str, ...] | None:
    """Flatten repeated and comma-separated --tag values."""
    # Typer hands over an empty sequence when the option is absent.
    if not tags:
        return None
    return tuple(tag for value in tags for tag in parse_tags(value))


def _build_query(
    title: str | None,
    description: str | None,
    completed: bool | None,
    priority: Priority | None,
    tags: list[str] | None,
    due_before: datetime | None,
    due_after: datetime | None,
    sort_by: SortField | None,
    desc: bool,
) -> FilterTasksQuery:
    return FilterTasksQuery(
        title=title,
        description=description,
        is_completed=completed,
        priority=priority,
        tags=_tags_option(tags),
        due_before=due_before,
        due_after=due_after,
        sort_by=sort_by,
        sort_descending=desc,
    )


# Shared filter options
TitleOpt = typer.Option(None, "--title", help="Title contains (case-insensitive)")
DescriptionOpt = typer.Option(None, "--description", help="Description contains (case-insensitive)")
CompletedOpt = typer.Option(None, "--completed/--pending", help="Completion status")
PriorityOpt = typer.Option(None, "--priority", "-p", case_sensitive=False, help="Exact priority")
TagOpt = typer.Option(None, "--tag", "-t", help="Has any of these tags (repeatable, comma-separated)")
DueBeforeOpt = typer.Option(None, "--due-before", help="Due on or before this date")
DueAfterOpt = typer.Option(None, "--due-after", help="Due on or after this date")
SortByOpt = typer.Option(
    None,
    "--sort-by",
    "-s",
    parser=SortField.parse,
    help="Field to sort by: title, priority, due_date, created_at or is_completed",
)
DescOpt = typer.Option(False, "--desc", help="Sort descending")


@app.command()
def create(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(None, "--description", "-d", help="Task description"),
    priority: Priority = typer.Option(Priority.LOW, "--priority", "-p", case_sensitive=False),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag (repeatable, comma-separated)"),
    due: datetime | None = typer.Option(None, "--due", help="Due date"),
) -> None:
    """Create a new task."""
    service = TaskService(_repository())
    try:
        task_id = service.create_task(
            title=title,
            description=description,
            tags=_tags_option(tags),
            due_date=due,
            priority=priority,
        )
    except (TaskTrackerError, ValueError) as e:
        raise _fail(e) from None
    console.print(f"[green]✓[/green] Task created with ID: {task_id}")


@app.command("list")
def list_tasks() -> None:
    """List all tasks."""
    try:
        tasks = TaskQueryHandler(_repository()).get_all()
    except TaskTrackerError as e:
        raise _fail(e) from None
    if not tasks:
        console.print("[yellow]No tasks found.[/yellow]")
        return
    console.print(tasks_table(tasks))


@app.command()
def show(task_id: UUID = typer.Argument(..., help="Task ID")) -> None:
    """Show task details."""
    try:
        task = TaskService(_repository()).get_task(task_id)
    except TaskTrackerError as e:
        raise _fail(e) from None
    console.print(task_detail(task))


@app.command()
def update(
    task_id: UUID = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    description: str | None = typer.Option(None, "--description", "-d", help="New description"),
    priority: Priority | None = typer.Option(None, "--priority", "-p", case_sensitive=False),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Replace tags"),
    due: datetime | None = typer.Option(None, "--due", help="New due date"),
) -> None:
    """Update a task; omitted options keep their current value."""
    service = TaskService(_repository())
    try:
        service.update_task(
            task_id,
            title=title,
            description=description,
            tags=_tags_option(tags),
            due_date=due,
            priority=priority,
        )
    except (TaskTrackerError, ValueError) as e:
        raise _fail(e) from None
    console.print(f"[green]✓[/green] Task {task_id} updated.")


@app.command()
def complete(
    task_id: UUID = typer.Argument(..., help="Task ID"),
    undo: bool = typer.Option(False, "--undo", help="Mark as not completed"),
) -> None:
    """Mark a task as completed."""
    try:
        TaskService(_repository()).complete_task(task_id, is_completed=not undo)
    except TaskTrackerError as e:
        raise _fail(e) from None
    status = "not completed" if undo else "completed"
    console.print(f"[green]✓[/green] Task {task_id} marked as {status}.")


@app.command()
def delete(task_id: UUID = typer.Argument(..., help="Task ID")) -> None:
    """Delete a task."""
    try:
        TaskService(_repository()).delete_task(task_id)
    except TaskTrackerError as e:
        raise _fail(e) from None
    console.print(f"[green]✓[/green] Task {task_id} deleted.")


@app.command()
def search(term: str = typer.Argument("", help="Text to find in titles and descriptions")) -> None:
    """Search task titles and descriptions."""
    try:
        tasks = TaskQueryHandler(_repository()).search(SearchTasksQuery(term))
    except TaskTrackerError as e:
        raise _fail(e) from None
    if not tasks:
        console.print("[yellow]No tasks found.[/yellow]")
        return
    console.print(tasks_table(tasks, title=f"Search: {term}"))


@app.command("filter")
def filter_tasks(
    title: str | None = TitleOpt,
    description: str | None = DescriptionOpt,
    completed: bool | None = CompletedOpt,
    priority: Priority | None = PriorityOpt,
    tags: list[str] | None = TagOpt,
    due_before: datetime | None = DueBeforeOpt,
    due_after: datetime | None = DueAfterOpt,
    sort_by: SortField | None = SortByOpt,
    desc: bool = DescOpt,
) -> None:
    """Filter and sort tasks."""
    query = _build_query(
        title, description, completed, priority, tags, due_before, due_after, sort_by, desc
    )
    try:
        tasks = TaskQueryHandler(_repository()).filter(query)
    except TaskTrackerError as e:
        raise _fail(e) from None
    if not tasks:
        console.print("[yellow]No tasks found.[/yellow]")
        return
    console.print(tasks_table(tasks, title="Filtered Tasks"))


@app.command()
def export(
    fmt: str = typer.Option("csv", "--format", "-f", help="csv, json or md"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output path without extension"
    ),
    title: str | None = TitleOpt,
    description: str | None = DescriptionOpt,
    completed: bool | None = CompletedOpt,
    priority: Priority | None = PriorityOpt,
    tags: list[str] | None = TagOpt,
    due_before: datetime | None = DueBeforeOpt,
    due_after: datetime | None = DueAfterOpt,
    sort_by: SortField | None = SortByOpt,
    desc: bool = DescOpt,
) -> None:
    """Export tasks, optionally filtered and sorted, to a file."""
    try:
        strategy = get_export_strategy(fmt)
    except ValueError as e:
        raise _fail(e) from None

    query = _build_query(
        title, description, completed, priority, tags, due_before, due_after, sort_by, desc
    )
    base_name = output if output is not None else get_settings().export_base_name
    try:
        tasks = TaskQueryHandler(_repository()).filter(query)
        path = ExportService(base_name).export_tasks(tasks, strategy)
    except TaskTrackerError as e:
        raise _fail(e) from None
    console.print(f"[green]✓[/green] Exported {len(tasks)} task(s) to {path}")


@app.command()
def serve() -> None:
    """Run the HTTP API server."""
    from task_tracker.api import run

    run()


if __name__ == "__main__":
    app()
