"""Delimited-text export."""

from __future__ import annotations

import csv
import io

from task_tracker.export.base import ExportStrategy
from task_tracker.models import Task

HEADER = ["Id", "CreatedAt", "Title", "Description", "Tags", "DueDate", "Priority", "IsCompleted"]

DATE_FORMAT = "%Y-%m-%d"


class CsvExportStrategy(ExportStrategy):
    """One row per task, every field quoted, tags joined with ``;``."""

    name = "csv"

    @property
    def file_extension(self) -> str:
        return ".csv"

    def render(self, tasks: list[Task]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(HEADER)
        for task in tasks:
            writer.writerow(
                [
                    str(task.id),
                    task.created_at.strftime(DATE_FORMAT),
                    task.title,
                    task.description or "",
                    ";".join(task.tags),
                    task.due_date.strftime(DATE_FORMAT) if task.due_date else "",
                    task.priority.label,
                    str(task.is_completed),
                ]
            )
        return buffer.getvalue()
