"""Tabular-markup export."""

from __future__ import annotations

from tabulate import tabulate

from task_tracker.export.base import ExportStrategy
from task_tracker.models import Task

HEADERS = ["Status", "Title", "Priority", "Due Date", "Tags", "Description"]


class MarkdownExportStrategy(ExportStrategy):
    """A Markdown document with a ``# Tasks`` heading and a pipe table."""

    name = "md"

    @property
    def file_extension(self) -> str:
        return ".md"

    def render(self, tasks: list[Task]) -> str:
        if not tasks:
            return "# Tasks\n\nNo tasks available.\n"

        rows = [
            [
                "✓" if task.is_completed else "",
                _escape(task.title),
                task.priority.label,
                task.due_date.strftime("%Y-%m-%d") if task.due_date else "-",
                _escape(", ".join(task.tags)) if task.tags else "-",
                _escape(task.description) if task.description is not None else "-",
            ]
            for task in tasks
        ]
        table = tabulate(rows, headers=HEADERS, tablefmt="github", disable_numparse=True)
        return f"# Tasks\n\n{table}\n"


def _escape(text: str) -> str:
    """Keep cell text on one line and out of the column separators."""
    return text.replace("|", "\\|").replace("\r", "").replace("\n", " ")
