"""Unit tests for SqliteTaskRepository.

Uses an in-memory SQLite database with the full migration schema applied, so
we test the real SQL without touching production data.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, date, datetime
from unittest.mock import MagicMock

import pytest

from taskmaster_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from taskmaster_cli.models import TaskCreate, TaskFilters
from taskmaster_cli.models.exceptions import NotFoundError, StoreFailureError


@pytest.mark.asyncio
async def test_add_sets_defaults(task_repo, user):
    task = await task_repo.add(
        user.id,
        TaskCreate(title="Gym", scheduled_date="2024-03-15", scheduled_time="07:00"),
    )

    assert task.user_id == user.id
    assert task.scheduled_date == date(2024, 3, 15)
    assert task.scheduled_time == "07:00"
    assert task.priority == "medium"
    assert task.completed is False
    assert task.completed_at is None
    assert task.completed_on_time is None
    assert task.points_earned == 0


@pytest.mark.asyncio
async def test_add_for_unknown_owner_fails(task_repo):
    with pytest.raises(StoreFailureError):
        await task_repo.add(
            "missing",
            TaskCreate(title="x", scheduled_date="2024-03-15", scheduled_time="07:00"),
        )


@pytest.mark.asyncio
async def test_get_is_owner_scoped(task_repo, user, other_user, add_task):
    task = await add_task(user.id)

    assert (await task_repo.get(user.id, task.id)).id == task.id
    with pytest.raises(NotFoundError):
        await task_repo.get(other_user.id, task.id)


@pytest.mark.asyncio
async def test_get_missing(task_repo, user):
    with pytest.raises(NotFoundError):
        await task_repo.get(user.id, "nope")


@pytest.mark.asyncio
async def test_list_default_order_date_desc_time_asc(task_repo, user, add_task):
    await add_task(user.id, "a", date(2024, 3, 14), "09:00")
    await add_task(user.id, "b", date(2024, 3, 15), "18:00")
    await add_task(user.id, "c", date(2024, 3, 15), "08:00")

    tasks = await task_repo.list_by_owner(user.id, TaskFilters())

    assert [t.title for t in tasks] == ["c", "b", "a"]


@pytest.mark.asyncio
async def test_list_filters(task_repo, user, other_user, add_task):
    await add_task(user.id, "early", date(2024, 3, 1), priority="high")
    await add_task(user.id, "mid", date(2024, 3, 10), priority="low")
    await add_task(user.id, "late", date(2024, 3, 20), priority="high")
    await add_task(other_user.id, "theirs", date(2024, 3, 10))

    ranged = await task_repo.list_by_owner(
        user.id, TaskFilters(start_date=date(2024, 3, 1), end_date=date(2024, 3, 10))
    )
    assert {t.title for t in ranged} == {"early", "mid"}

    on_day = await task_repo.list_by_owner(user.id, TaskFilters(on_date=date(2024, 3, 10)))
    assert [t.title for t in on_day] == ["mid"]

    high = await task_repo.list_by_owner(
        user.id, TaskFilters(priority="high", order="date_asc")
    )
    assert [t.title for t in high] == ["early", "late"]


@pytest.mark.asyncio
async def test_list_completed_filter(task_repo, user, add_task):
    task = await add_task(user.id, "done")
    await add_task(user.id, "open")
    await task_repo.save(
        task.model_copy(
            update={
                "completed": True,
                "completed_at": datetime(2024, 3, 15, 9, 0, tzinfo=UTC),
                "completed_on_time": True,
                "points_earned": 18,
            }
        )
    )

    done = await task_repo.list_by_owner(user.id, TaskFilters(completed=True))
    pending = await task_repo.list_by_owner(user.id, TaskFilters(completed=False))

    assert [t.title for t in done] == ["done"]
    assert [t.title for t in pending] == ["open"]


@pytest.mark.asyncio
async def test_save_round_trips_scoring_fields(task_repo, user, add_task):
    task = await add_task(user.id)
    completed_at = datetime(2024, 3, 15, 13, 0, tzinfo=UTC)

    saved = await task_repo.save(
        task.model_copy(
            update={
                "title": "Renamed",
                "completed": True,
                "completed_at": completed_at,
                "completed_on_time": False,
                "points_earned": 8,
            }
        )
    )

    assert saved.title == "Renamed"
    assert saved.completed is True
    assert saved.completed_at == completed_at
    assert saved.completed_on_time is False
    assert saved.points_earned == 8


@pytest.mark.asyncio
async def test_save_missing_task(task_repo, user, add_task, task_factory):
    with pytest.raises(NotFoundError):
        await task_repo.save(task_factory(id="ghost", user_id=user.id))


@pytest.mark.asyncio
async def test_delete_returns_prior_task(task_repo, user, add_task):
    task = await add_task(user.id, "bye")

    deleted = await task_repo.delete(user.id, task.id)

    assert deleted.id == task.id
    assert deleted.title == "bye"
    with pytest.raises(NotFoundError):
        await task_repo.get(user.id, task.id)


@pytest.mark.asyncio
async def test_delete_other_owner_is_not_found(task_repo, user, other_user, add_task):
    task = await add_task(user.id)
    with pytest.raises(NotFoundError):
        await task_repo.delete(other_user.id, task.id)
    assert (await task_repo.get(user.id, task.id)).id == task.id


@pytest.mark.asyncio
async def test_sqlite_errors_become_store_failures():
    conn = MagicMock()
    conn.execute.side_effect = sqlite3.OperationalError("disk I/O error")
    repo = SqliteTaskRepository(connection=conn)

    with pytest.raises(StoreFailureError, match="disk I/O error"):
        await repo.list_by_owner("user-001", TaskFilters())
    conn.rollback.assert_called_once()
