"""Task repository implementations."""

from __future__ import annotations

from task_tracker.config import Settings
from task_tracker.repositories.base import TaskRepository
from task_tracker.repositories.json_repository import JsonTaskRepository
from task_tracker.repositories.sqlite_repository import SqliteTaskRepository

__all__ = [
    "JsonTaskRepository",
    "SqliteTaskRepository",
    "TaskRepository",
    "create_repository",
]


def create_repository(settings: Settings) -> TaskRepository:
    """Build the repository selected by ``settings.storage_backend``."""
    if settings.storage_backend == "sqlite":
        return SqliteTaskRepository(settings.sqlite_path)
    return JsonTaskRepository(settings.json_path)
