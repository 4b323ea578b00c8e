"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config directory and
database: repositories run against in-memory SQLite with the real schema.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import patch

import pytest
import pytest_asyncio

from taskmaster_cli.adapters.sqlite import (
    SqliteTaskRepository,
    SqliteUserRepository,
    create_connection,
)
from taskmaster_cli.models import Task, TaskCreate, UserCreate
from taskmaster_cli.services.stats_service import UserLockRegistry
from taskmaster_cli.services.task_service import TaskService

# 2024-03-15 12:00 UTC, a fixed "now" for services under test
FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


def make_task(**overrides) -> Task:
    """Build a Task with sensible defaults for pure-function tests."""
    data = {
        "id": "task-0001",
        "user_id": "user-001",
        "title": "Write report",
        "scheduled_date": date(2024, 3, 15),
        "scheduled_time": "14:00",
        "priority": "medium",
        "created_at": datetime(2024, 3, 1, tzinfo=UTC),
        "updated_at": datetime(2024, 3, 1, tzinfo=UTC),
    }
    data.update(overrides)
    return Task(**data)


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def connection():
    """In-memory SQLite connection with all migrations applied."""
    conn = create_connection(":memory:")
    yield conn
    conn.close()


@pytest.fixture()
def task_repo(connection):
    return SqliteTaskRepository(connection=connection)


@pytest.fixture()
def user_repo(connection):
    return SqliteUserRepository(connection=connection)


@pytest_asyncio.fixture()
async def user(user_repo):
    return await user_repo.add(UserCreate(name="Alice", username="alice"))


@pytest_asyncio.fixture()
async def other_user(user_repo):
    return await user_repo.add(UserCreate(name="Bob", username="bob"))


@pytest.fixture()
def clock():
    """Mutable clock: set ``clock.now`` to move time."""

    class _Clock:
        now = FIXED_NOW

        def __call__(self):
            return self.now

    return _Clock()


@pytest.fixture()
def task_service(task_repo, user_repo, clock):
    return TaskService(
        task_repo, user_repo, tz=UTC, clock=clock, locks=UserLockRegistry()
    )


@pytest_asyncio.fixture()
async def add_task(task_repo):
    """Insert a task for an owner straight through the repository."""

    async def _add(owner_id, title="Task", day=date(2024, 3, 15), at="14:00", priority="medium"):
        return await task_repo.add(
            owner_id,
            TaskCreate(title=title, scheduled_date=day, scheduled_time=at, priority=priority),
        )

    return _add


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_app_dirs(tmp_path_factory):
    """Keep config files of every test out of the real user directories."""
    from taskmaster_cli.services.config_service import get_config_service
    from taskmaster_cli.utils.ui.console import set_color

    app_dir = str(tmp_path_factory.mktemp("app_dirs"))
    get_config_service.cache_clear()
    with patch("taskmaster_cli.services.config_service.user_config_dir", return_value=app_dir):
        with patch("taskmaster_cli.services.config_service.user_data_dir", return_value=app_dir):
            yield app_dir
    get_config_service.cache_clear()
    set_color(True)


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from taskmaster_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("taskmaster_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("taskmaster_cli.services.config_service.user_data_dir", return_value=tmpdir):
            from taskmaster_cli.services.config_service import ConfigService

            svc = ConfigService()
            yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def task_factory():
    return make_task
