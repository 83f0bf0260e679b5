"""Tests for Task model."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from task_tracker.models import Priority, Task, parse_tags, task_from_dict, task_to_dict


class TestPriority:
    """Tests for Priority enum."""

    def test_from_string_valid(self):
        assert Priority.from_string("HIGH") == Priority.HIGH
        assert Priority.from_string("medium") == Priority.MEDIUM
        assert Priority.from_string("Low") == Priority.LOW

    def test_from_string_invalid(self):
        with pytest.raises(ValueError, match="Invalid priority"):
            Priority.from_string("URGENT")

    def test_rank_orders_low_medium_high(self):
        assert [p.rank for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH)] == [0, 1, 2]

    def test_label(self):
        assert Priority.HIGH.label == "High"


class TestTask:
    """Tests for Task dataclass."""

    def test_create_minimal(self):
        task = Task(title="Test task")
        assert task.title == "Test task"
        assert task.description is None
        assert task.is_completed is False
        assert task.priority == Priority.LOW
        assert task.tags == ()
        assert isinstance(task.id, UUID)
        assert isinstance(task.created_at, datetime)

    def test_ids_are_unique(self):
        assert Task(title="A").id != Task(title="A").id

    def test_tags_stored_as_tuple(self):
        task = Task(title="Tagged", tags=["b", "a"])
        assert task.tags == ("b", "a")

    def test_empty_title_raises(self):
        with pytest.raises(ValueError, match="Title cannot be empty"):
            Task(title="")

    def test_whitespace_title_raises(self):
        with pytest.raises(ValueError, match="Title cannot be empty"):
            Task(title="   ")

    def test_with_updates_keeps_identity(self):
        task = Task(title="Original", description="Desc", priority=Priority.HIGH)
        updated = task.with_updates(title="Updated")

        assert updated.id == task.id
        assert updated.created_at == task.created_at
        assert updated.title == "Updated"
        assert updated.description == "Desc"
        assert updated.priority == Priority.HIGH

    def test_with_updates_rejects_empty_title(self):
        task = Task(title="Original")
        with pytest.raises(ValueError):
            task.with_updates(title="")

    def test_with_updates_completion(self):
        task = Task(title="Toggle me")
        assert task.with_updates(is_completed=True).is_completed is True

    def test_task_is_immutable(self):
        task = Task(title="Frozen")
        with pytest.raises(AttributeError):
            task.title = "Changed"  # type: ignore[misc]

    def test_aware_datetimes_stored_as_local_naive(self):
        due = datetime(2026, 10, 20, 9, 0, tzinfo=timezone(timedelta(hours=-4)))
        task = Task(title="Offset", due_date=due, created_at=due)

        assert task.due_date.tzinfo is None
        assert task.created_at.tzinfo is None
        assert task.due_date == due.astimezone().replace(tzinfo=None)

    def test_naive_datetimes_kept(self):
        due = datetime(2026, 10, 20, 9, 0)
        assert Task(title="Naive", due_date=due).due_date == due


class TestSerialization:
    """Tests for dict conversion."""

    def test_round_trip_preserves_fields(self):
        task = Task(
            title="Full task",
            description="A complete task",
            priority=Priority.MEDIUM,
            tags=("work",),
            due_date=datetime(2026, 12, 31, 23, 59),
            is_completed=True,
        )
        assert task_from_dict(task_to_dict(task)) == task

    def test_to_dict_uses_plain_values(self):
        task = Task(title="Plain", due_date=None)
        data = task_to_dict(task)

        assert data["id"] == str(task.id)
        assert data["priority"] == "LOW"
        assert data["due_date"] is None
        assert data["tags"] == []


def test_parse_tags():
    assert parse_tags(" work, home ,,urgent ") == ["work", "home", "urgent"]
