"""Structured-data export."""

from __future__ import annotations

import json

from task_tracker.export.base import ExportStrategy
from task_tracker.models import Task, task_to_dict


class JsonExportStrategy(ExportStrategy):
    """A JSON array with one object per task."""

    name = "json"

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    @property
    def file_extension(self) -> str:
        return ".json"

    def render(self, tasks: list[Task]) -> str:
        return json.dumps([task_to_dict(t) for t in tasks], indent=self.indent, ensure_ascii=False)
