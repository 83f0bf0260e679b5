"""Test fixtures and configuration."""

import logging
from collections.abc import AsyncGenerator, Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fakes import FakeTaskRepository
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from task_tracker.api import create_app
from task_tracker.config import Settings
from task_tracker.models import Priority, Task
from task_tracker.utils.logging import ROOT_LOGGER_NAME


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for due-date fixtures."""
    return datetime(2026, 10, 19, 12, 0)


@pytest.fixture
def sample_tasks(now: datetime) -> list[Task]:
    """Four tasks covering every filter and sort case.

    Created one minute apart so created_at ordering matches list order.
    """
    return [
        Task(
            title="Buy groceries",
            description="Get milk and eggs",
            tags=("shopping", "urgent"),
            due_date=now + timedelta(days=1),
            priority=Priority.HIGH,
            created_at=now - timedelta(minutes=4),
        ),
        Task(
            title="Write report",
            description="Complete quarterly report",
            tags=("work", "documents"),
            due_date=now + timedelta(days=7),
            priority=Priority.MEDIUM,
            created_at=now - timedelta(minutes=3),
        ),
        Task(
            title="Call dentist",
            description="Schedule appointment",
            tags=("health", "urgent"),
            due_date=now - timedelta(days=1),
            priority=Priority.LOW,
            is_completed=True,
            created_at=now - timedelta(minutes=2),
        ),
        Task(
            title="Grocery shopping",
            description="Weekly shopping",
            tags=("shopping",),
            due_date=None,
            priority=Priority.MEDIUM,
            created_at=now - timedelta(minutes=1),
        ),
    ]


@pytest.fixture
def mixed_zone_tasks() -> list[Task]:
    """Due dates given with and without a UTC offset, two days apart.

    The gaps exceed any UTC offset, so the order holds in every local zone.
    """
    return [
        Task(
            title="Offset +05:00",
            due_date=datetime(2026, 10, 24, 9, 0, tzinfo=timezone(timedelta(hours=5))),
        ),
        Task(title="Naive", due_date=datetime(2026, 10, 22, 9, 0)),
        Task(title="No due date"),
        Task(title="UTC", due_date=datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)),
    ]


@pytest.fixture
def fake_repository(sample_tasks: list[Task]) -> FakeTaskRepository:
    """Fake repository preloaded with the sample tasks."""
    return FakeTaskRepository(sample_tasks)


@pytest.fixture
def json_path(tmp_path: Path) -> Path:
    """Path for a temporary JSON store."""
    return tmp_path / "tasks.json"


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a temporary SQLite store."""
    return tmp_path / "tasks.db"


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing every store and export at a temp directory."""
    return Settings(
        json_path=tmp_path / "tasks.json",
        sqlite_path=tmp_path / "tasks.db",
        export_base_name=str(tmp_path / "export"),
    )


@pytest.fixture
def app(test_settings: Settings, fake_repository: FakeTaskRepository) -> FastAPI:
    """Application serving the sample tasks from the fake repository."""
    return create_app(test_settings, repository=fake_repository)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging during a test."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
