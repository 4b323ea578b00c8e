"""Stats service - recomputes a user's points and level.

Totals are always rebuilt from the full set of the user's completed tasks
instead of being patched incrementally. That costs one O(n) scan per
completion change, in exchange for totals that cannot drift through double
counting or missed decrements. A large task volume would call for an
indexed running counter with compensating writes instead.
"""

from __future__ import annotations

import asyncio

from taskmaster_cli.models import TaskFilters, UserStats
from taskmaster_cli.models.rewards.scoring import level_for_points
from taskmaster_cli.repositories import TaskRepository, UserRepository
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("stats")


class UserLockRegistry:
    """One asyncio.Lock per user id.

    Mutations that change a user's completion state hold the user's lock
    across "save task, recompute totals", so two concurrent completions
    cannot both read the old task set and lose one contribution.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}

    def lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock


_user_locks = UserLockRegistry()


def get_user_locks() -> UserLockRegistry:
    """Process-wide lock registry shared by all services."""
    return _user_locks


class StatsService:
    """Service for the derived user totals."""

    def __init__(self, task_repository: TaskRepository, user_repository: UserRepository):
        self.task_repository = task_repository
        self.user_repository = user_repository

    async def recompute_user_stats(self, user_id: str) -> UserStats:
        """Recompute and persist a user's total points and level.

        Callers that mutate tasks should hold the user's lock from
        ``get_user_locks()`` around the mutation and this call.

        Args:
            user_id: User whose totals are rebuilt

        Returns:
            The persisted UserStats

        Raises:
            NotFoundError: If the user does not exist
            StoreFailureError: If the store cannot be read or written
        """
        await self.user_repository.get(user_id)

        completed_tasks = await self.task_repository.list_by_owner(
            user_id, TaskFilters(completed=True)
        )
        total_points = sum(t.points_earned for t in completed_tasks if t.completed)
        level = level_for_points(total_points)

        await self.user_repository.save_stats(user_id, total_points, level)
        logger.info(
            "recomputed stats for user %s: %d points, level %d (%d completed tasks)",
            user_id,
            total_points,
            level,
            len(completed_tasks),
        )
        return UserStats(total_points=total_points, level=level)
