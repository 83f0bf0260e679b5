"""Writes exported tasks to disk."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from task_tracker.cancellation import CancellationToken
from task_tracker.exceptions import ExportError
from task_tracker.export.base import ExportStrategy
from task_tracker.models import Task
from task_tracker.utils.logging import get_logger

logger = get_logger("export")


class ExportService:
    """Saves encoded tasks as ``<base_name><extension>``."""

    def __init__(self, base_name: str | Path) -> None:
        self._base_name = str(base_name)

    def target_path(self, strategy: ExportStrategy) -> Path:
        return Path(self._base_name + strategy.file_extension)

    def export_tasks(
        self,
        tasks: Iterable[Task],
        strategy: ExportStrategy,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Path:
        """Encode ``tasks`` with ``strategy`` and write the file; returns its path."""
        content = strategy.export(tasks, cancel_token)
        path = self.target_path(strategy)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExportError(str(path), str(e)) from e
        logger.info("Exported tasks", extra={"path": str(path), "format": strategy.name})
        return path
