"""Unit tests for SqliteUserRepository."""

from __future__ import annotations

import pytest

from taskmaster_cli.models import UserCreate
from taskmaster_cli.models.exceptions import InvalidInputError, NotFoundError


@pytest.mark.asyncio
async def test_add_and_get(user_repo):
    user = await user_repo.add(
        UserCreate(name="Alice", username="alice", email="alice@example.com")
    )

    fetched = await user_repo.get(user.id)
    assert fetched.username == "alice"
    assert fetched.email == "alice@example.com"
    assert (fetched.total_points, fetched.level, fetched.current_streak) == (0, 1, 0)


@pytest.mark.asyncio
async def test_duplicate_username_rejected(user_repo, user):
    with pytest.raises(InvalidInputError, match="already taken"):
        await user_repo.add(UserCreate(name="Other", username="alice"))


@pytest.mark.asyncio
async def test_get_by_username(user_repo, user):
    assert (await user_repo.get_by_username("alice")).id == user.id
    with pytest.raises(NotFoundError):
        await user_repo.get_by_username("nobody")


@pytest.mark.asyncio
async def test_get_missing(user_repo):
    with pytest.raises(NotFoundError):
        await user_repo.get("missing")


@pytest.mark.asyncio
async def test_save_stats_writes_both_fields(user_repo, user):
    saved = await user_repo.save_stats(user.id, 245, 3)
    assert (saved.total_points, saved.level) == (245, 3)


@pytest.mark.asyncio
async def test_save_stats_missing_user(user_repo):
    with pytest.raises(NotFoundError):
        await user_repo.save_stats("missing", 10, 1)


@pytest.mark.asyncio
async def test_set_streak(user_repo, user):
    assert (await user_repo.set_streak(user.id, 7)).current_streak == 7
    with pytest.raises(InvalidInputError):
        await user_repo.set_streak(user.id, -1)


@pytest.mark.asyncio
async def test_list_top_orders_by_points(user_repo, user, other_user):
    await user_repo.save_stats(other_user.id, 300, 4)
    await user_repo.save_stats(user.id, 120, 2)
    carol = await user_repo.add(UserCreate(name="Carol", username="carol"))

    top = await user_repo.list_top(2)

    assert [u.id for u in top] == [other_user.id, user.id]
    assert carol.id not in [u.id for u in top]
