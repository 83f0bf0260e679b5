"""Request/response schemas for the task endpoints."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from task_tracker.models import Priority


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Read directly from Task dataclasses
        str_strip_whitespace=True,
    )


class TaskRead(BaseSchema):
    """A task as returned by the API."""

    id: UUID
    title: str
    description: str | None = None
    priority: Priority
    tags: list[str]
    due_date: datetime | None = None
    created_at: datetime
    is_completed: bool


class TaskCreate(BaseSchema):
    """Schema for creating a new task."""

    title: str = Field(
        ...,
        min_length=1,
        description="Task title",
        examples=["Buy groceries"],
    )
    description: str | None = Field(default=None, description="Optional description")
    tags: list[str] | None = Field(default=None, description="Labels for the task")
    due_date: datetime | None = Field(default=None, description="Optional due date")
    priority: Priority = Field(default=Priority.LOW, description="LOW, MEDIUM or HIGH")

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v: Any) -> Any:
        """Accept priority names in any case."""
        if isinstance(v, str):
            return Priority.from_string(v)
        return v


class TaskUpdate(BaseSchema):
    """Schema for updating an existing task.

    All fields are optional - only provided fields will be updated.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    tags: list[str] | None = None
    due_date: datetime | None = None
    priority: Priority | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v: Any) -> Any:
        """Accept priority names in any case."""
        if isinstance(v, str):
            return Priority.from_string(v)
        return v


class TaskIdResponse(BaseModel):
    """Response containing the ID of a created task."""

    id: UUID
