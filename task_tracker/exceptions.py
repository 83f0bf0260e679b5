"""
Custom exceptions for the task tracker.

Exception hierarchy:
- TaskTrackerError (base)
  - TaskNotFoundError
  - OperationCancelledError
  - RepositoryError
  - ExportError
  - TaskValidationError (also a ValueError)
"""

from __future__ import annotations

from typing import Any
from uuid import UUID


class TaskTrackerError(Exception):
    """
    Base exception for all task tracker errors.

    Attributes:
        message: Human-readable error description
        details: Additional context for debugging
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class TaskNotFoundError(TaskTrackerError):
    """Referenced task identifier has no corresponding task."""

    def __init__(self, task_id: UUID | str) -> None:
        super().__init__(f"Task with id {task_id} not found")
        self.task_id = task_id


class OperationCancelledError(TaskTrackerError):
    """The caller aborted the in-flight operation."""

    def __init__(self, operation: str | None = None) -> None:
        message = "Operation was cancelled"
        if operation:
            message = f"Operation '{operation}' was cancelled"
        super().__init__(message)
        self.operation = operation


class RepositoryError(TaskTrackerError):
    """The task store could not be read or written."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(
            f"Task store '{location}' is unusable: {reason}",
            {"location": location},
        )
        self.location = location


class ExportError(TaskTrackerError):
    """Exported tasks could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to export tasks to '{path}': {reason}", {"path": path})
        self.path = path


class TaskValidationError(TaskTrackerError, ValueError):
    """A task field or request value is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, {"field": field} if field else None)
        self.field = field
