"""Display formatting for task output."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from task_tracker.models import Priority, Task

PRIORITY_COLORS = {
    Priority.LOW: "green",
    Priority.MEDIUM: "yellow",
    Priority.HIGH: "red",
}


def tasks_table(tasks: Sequence[Task], title: str = "Tasks") -> Table:
    """Build a table with one row per task."""
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Done", justify="center")
    table.add_column("Priority")
    table.add_column("Due Date")
    table.add_column("Tags", style="cyan")

    for task in tasks:
        color = PRIORITY_COLORS[task.priority]
        table.add_row(
            str(task.id),
            escape(_truncate(task.title, 40)),
            "✓" if task.is_completed else "○",
            f"[{color}]{task.priority.label}[/{color}]",
            _format_date(task.due_date),
            escape(", ".join(task.tags)),
        )
    return table


def task_detail(task: Task) -> Panel:
    """Build a panel with every field of a single task."""
    status = "[green]Completed ✓[/green]" if task.is_completed else "[grey50]Incomplete ○[/grey50]"
    body = Text.from_markup(
        "\n".join(
            [
                f"[bold]Title:[/bold] {escape(task.title)}",
                f"[bold]Description:[/bold] {escape(task.description or 'N/A')}",
                f"[bold]Priority:[/bold] {task.priority.label}",
                f"[bold]Status:[/bold] {status}",
                f"[bold]Tags:[/bold] {escape(', '.join(task.tags)) if task.tags else 'None'}",
                f"[bold]Due Date:[/bold] {_format_date(task.due_date) or 'N/A'}",
                f"[bold]Created At:[/bold] {_format_date(task.created_at)}",
            ]
        )
    )
    return Panel(body, title=f"Task: {task.id}")


def _truncate(text: str, max_len: int) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"


def _format_date(dt: datetime | None) -> str:
    """Format datetime for display."""
    if dt is None:
        return ""
    return dt.strftime("%Y-%m-%d %H:%M")
