"""JSON flat-file repository for task persistence."""

from __future__ import annotations

import json
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Optional
from uuid import UUID

from task_tracker.exceptions import RepositoryError
from task_tracker.models import Task, task_from_dict, task_to_dict
from task_tracker.utils.logging import get_logger

logger = get_logger("repositories.json")


class JsonTaskRepository:
    """Stores all tasks as a JSON array in a single file.

    Reads see the committed tasks, loaded lazily from the file on first
    access. ``add``, ``update`` and ``delete`` change a staged copy that only
    :meth:`save` publishes: it rewrites the whole file through a temp file and
    rename, then makes the staged copy the committed one. A failed save
    discards the staged changes.
    """

    def __init__(self, path: Path) -> None:
        """Initialize repository, creating an empty store file if needed."""
        self._path = Path(path)
        self._lock = threading.Lock()
        self._committed: Optional[list[Task]] = None
        self._staged: Optional[list[Task]] = None
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._path.write_text("[]", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[Task]:
        """Return the committed task list, reading the file on first use."""
        if self._committed is None:
            try:
                content = self._path.read_text(encoding="utf-8")
            except OSError as e:
                raise RepositoryError(str(self._path), str(e)) from e
            if not content.strip():
                self._committed = []
            else:
                try:
                    self._committed = [task_from_dict(item) for item in json.loads(content)]
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    raise RepositoryError(str(self._path), str(e)) from e
            logger.debug("Loaded tasks", extra={"count": len(self._committed)})
        return self._committed

    def _working(self) -> list[Task]:
        """Return the staged task list, starting from the committed one."""
        if self._staged is None:
            self._staged = list(self._load())
        return self._staged

    def _index_of(self, tasks: list[Task], task_id: UUID) -> Optional[int]:
        for i, task in enumerate(tasks):
            if task.id == task_id:
                return i
        return None

    def get_all(self) -> Sequence[Task]:
        """Retrieve all committed tasks in insertion order."""
        with self._lock:
            return list(self._load())

    def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Retrieve a committed task by ID, or None if not found."""
        with self._lock:
            tasks = self._load()
            index = self._index_of(tasks, task_id)
            return tasks[index] if index is not None else None

    def add(self, task: Task) -> UUID:
        """Stage a new task and return its ID."""
        with self._lock:
            self._working().append(task)
        return task.id

    def update(self, task: Task) -> None:
        """Stage a replacement for the task with the same ID; unknown IDs are ignored."""
        with self._lock:
            tasks = self._working()
            index = self._index_of(tasks, task.id)
            if index is not None:
                tasks[index] = task

    def delete(self, task_id: UUID) -> None:
        """Stage removal of a task; unknown IDs are ignored."""
        with self._lock:
            tasks = self._working()
            index = self._index_of(tasks, task_id)
            if index is not None:
                del tasks[index]

    def save(self) -> None:
        """Write the staged tasks to the store file and commit them."""
        with self._lock:
            if self._staged is None:
                return
            tasks = self._staged
            content = json.dumps([task_to_dict(t) for t in tasks], indent=2)
            temp_path = self._path.with_suffix(".tmp")
            try:
                temp_path.write_text(content + "\n", encoding="utf-8")
                temp_path.replace(self._path)
            except OSError as e:
                self._staged = None
                logger.error("Save failed, staged changes discarded", extra={"reason": str(e)})
                raise RepositoryError(str(self._path), f"write failed: {e}") from e
            self._committed = tasks
            self._staged = None
        logger.debug("Saved tasks", extra={"count": len(tasks), "path": str(self._path)})
