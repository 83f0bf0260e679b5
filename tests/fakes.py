"""Fakes and helpers shared by the tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional
from uuid import UUID

from task_tracker.models import Task


class FakeTaskRepository:
    """In-memory repository that records how it was used."""

    def __init__(self, tasks: Sequence[Task] = ()) -> None:
        self.tasks: list[Task] = list(tasks)
        self.get_all_calls = 0
        self.save_calls = 0

    def get_all(self) -> Sequence[Task]:
        self.get_all_calls += 1
        return list(self.tasks)

    def get_by_id(self, task_id: UUID) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def add(self, task: Task) -> UUID:
        self.tasks.append(task)
        return task.id

    def update(self, task: Task) -> None:
        self.tasks = [task if t.id == task.id else t for t in self.tasks]

    def delete(self, task_id: UUID) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def save(self) -> None:
        self.save_calls += 1


def titles(tasks: Sequence[Task]) -> list[str]:
    """Task titles in order."""
    return [t.title for t in tasks]
