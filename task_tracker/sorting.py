"""Stable single-field ordering of tasks."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any, Optional

from task_tracker.models import Task


class SortField(StrEnum):
    """Fields a task sequence can be ordered by."""

    TITLE = "title"
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    CREATED_AT = "created_at"
    IS_COMPLETED = "is_completed"

    @classmethod
    def parse(cls, value: str) -> SortField:
        """Parse a sort field name or alias, case-insensitive."""
        normalized = value.strip().lower().replace("-", "_")
        field = _ALIASES.get(normalized)
        if field is None:
            try:
                field = cls(normalized)
            except ValueError:
                valid = ", ".join(f.value for f in cls)
                raise ValueError(f"Invalid sort field '{value}'. Must be one of: {valid}")
        return field


_ALIASES = {
    "due": SortField.DUE_DATE,
    "duedate": SortField.DUE_DATE,
    "created": SortField.CREATED_AT,
    "createdat": SortField.CREATED_AT,
    "completed": SortField.IS_COMPLETED,
    "iscompleted": SortField.IS_COMPLETED,
}


def _due_date_key(task: Task) -> tuple[bool, Any]:
    # Missing due dates sort as the minimum value; reversing for a descending
    # sort therefore moves them to the end.
    if task.due_date is None:
        return (False, 0)
    return (True, task.due_date)


_SORT_KEYS: dict[SortField, Callable[[Task], Any]] = {
    SortField.TITLE: lambda t: t.title,
    SortField.PRIORITY: lambda t: t.priority.rank,
    SortField.DUE_DATE: _due_date_key,
    SortField.CREATED_AT: lambda t: t.created_at,
    SortField.IS_COMPLETED: lambda t: t.is_completed,
}


def sort_tasks(
    tasks: Iterable[Task],
    sort_by: Optional[SortField] = None,
    descending: bool = False,
) -> list[Task]:
    """Order tasks by one field.

    Without ``sort_by`` the input order is kept. The sort is stable in both
    directions: tasks with equal keys keep their relative input order.
    Titles compare by code point, not by locale.
    """
    if sort_by is None:
        return list(tasks)
    return sorted(tasks, key=_SORT_KEYS[sort_by], reverse=descending)
