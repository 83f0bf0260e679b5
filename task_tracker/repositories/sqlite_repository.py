"""SQLite repository for task persistence."""

from __future__ import annotations

import json
import sqlite3
import threading
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Optional
from uuid import UUID

from task_tracker.exceptions import RepositoryError
from task_tracker.models import Priority, Task
from task_tracker.utils.logging import get_logger

logger = get_logger("repositories.sqlite")


class SqliteTaskRepository:
    """Stores tasks in a single SQLite table.

    Writes go through one connection and reads through another, both behind a
    lock. ``add``, ``update`` and ``delete`` run inside the writer's open
    transaction, so reads see them only after :meth:`save` commits. ``seq``
    preserves insertion order for ``get_all``.
    """

    _CREATE_TABLE_SQL = """
        CREATE TABLE IF NOT EXISTS tasks (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            title TEXT NOT NULL,
            description TEXT,
            priority TEXT NOT NULL,
            tags TEXT NOT NULL DEFAULT '[]',
            due_date TEXT,
            created_at TEXT NOT NULL,
            is_completed INTEGER DEFAULT 0
        )
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize repository with database path."""
        self._db_path = Path(db_path)
        self._lock = threading.Lock()
        self._ensure_directory()
        self._writer = self._connect()
        self._init_schema()
        self._reader = self._connect()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_directory(self) -> None:
        """Create database directory if needed."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._lock:
            self._writer.execute(self._CREATE_TABLE_SQL)
            self._writer.commit()

    def close(self) -> None:
        """Close both connections, discarding uncommitted changes."""
        with self._lock:
            self._writer.close()
            self._reader.close()

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        """Convert database row to Task object."""
        try:
            return self._parse_row(row)
        except (ValueError, TypeError) as e:
            raise RepositoryError(str(self._db_path), f"bad row {row['id']!r}: {e}") from e

    def _parse_row(self, row: sqlite3.Row) -> Task:
        due_date = None
        if row["due_date"]:
            due_date = datetime.fromisoformat(row["due_date"])

        return Task(
            id=UUID(row["id"]),
            title=row["title"],
            description=row["description"],
            priority=Priority(row["priority"]),
            tags=tuple(json.loads(row["tags"])),
            due_date=due_date,
            created_at=datetime.fromisoformat(row["created_at"]),
            is_completed=bool(row["is_completed"]),
        )

    def get_all(self) -> Sequence[Task]:
        """Retrieve all tasks in insertion order."""
        with self._lock:
            rows = self._reader.execute("SELECT * FROM tasks ORDER BY seq").fetchall()
        return [self._row_to_task(row) for row in rows]

    def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Retrieve a task by ID, or None if not found."""
        with self._lock:
            row = self._reader.execute(
                "SELECT * FROM tasks WHERE id = ?", (str(task_id),)
            ).fetchone()
        return self._row_to_task(row) if row else None

    def add(self, task: Task) -> UUID:
        """Stage a new task and return its ID."""
        due_date_str = task.due_date.isoformat() if task.due_date else None
        with self._lock:
            self._writer.execute(
                """
                INSERT INTO tasks
                    (id, title, description, priority, tags, due_date, created_at, is_completed)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(task.id),
                    task.title,
                    task.description,
                    task.priority.value,
                    json.dumps(list(task.tags)),
                    due_date_str,
                    task.created_at.isoformat(),
                    int(task.is_completed),
                ),
            )
        return task.id

    def update(self, task: Task) -> None:
        """Stage new values for the mutable fields of an existing task."""
        due_date_str = task.due_date.isoformat() if task.due_date else None
        with self._lock:
            self._writer.execute(
                """
                UPDATE tasks
                SET title = ?, description = ?, priority = ?,
                    tags = ?, due_date = ?, is_completed = ?
                WHERE id = ?
                """,
                (
                    task.title,
                    task.description,
                    task.priority.value,
                    json.dumps(list(task.tags)),
                    due_date_str,
                    int(task.is_completed),
                    str(task.id),
                ),
            )

    def delete(self, task_id: UUID) -> None:
        """Stage removal of a task by ID."""
        with self._lock:
            self._writer.execute("DELETE FROM tasks WHERE id = ?", (str(task_id),))

    def save(self) -> None:
        """Commit staged changes; a failed commit rolls them back."""
        with self._lock:
            try:
                self._writer.commit()
            except sqlite3.Error as e:
                self._writer.rollback()
                raise RepositoryError(str(self._db_path), f"commit failed: {e}") from e
        logger.debug("Committed changes", extra={"path": str(self._db_path)})
