"""Rewards service - points, achievements and the leaderboard."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from taskmaster_cli.models import TaskFilters
from taskmaster_cli.models.exceptions import InvalidInputError
from taskmaster_cli.models.rewards.achievements import (
    ACHIEVEMENTS,
    Achievement,
    count_completed,
    count_on_time,
    evaluate_achievements,
)
from taskmaster_cli.repositories import TaskRepository, UserRepository

CURRENT_USER_LABEL = "You"


@dataclass(frozen=True)
class RewardsSummary:
    total_points: int
    level: int
    current_streak: int
    tasks_completed: int
    on_time_completed: int
    badges_earned: int
    unlocked_achievements: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AchievementStatus:
    achievement: Achievement
    unlocked: bool

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self.achievement)
        data["category"] = self.achievement.category.value
        data["unlocked"] = self.unlocked
        return data


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    name: str
    username: str
    points: int
    level: int
    is_current_user: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RewardsService:
    """Read-only views over a user's derived rewards."""

    def __init__(self, task_repository: TaskRepository, user_repository: UserRepository):
        self.task_repository = task_repository
        self.user_repository = user_repository

    async def _user_and_tasks(self, owner_id: str):
        user = await self.user_repository.get(owner_id)
        tasks = await self.task_repository.list_by_owner(owner_id, TaskFilters())
        return user, tasks

    async def get_rewards(self, owner_id: str) -> RewardsSummary:
        """Summarize points, level, streak and unlocked achievements.

        Raises:
            NotFoundError: If the user does not exist
        """
        user, tasks = await self._user_and_tasks(owner_id)
        unlocked = evaluate_achievements(user, tasks)
        return RewardsSummary(
            total_points=user.total_points,
            level=user.level,
            current_streak=user.current_streak,
            tasks_completed=count_completed(tasks),
            on_time_completed=count_on_time(tasks),
            badges_earned=len(unlocked),
            unlocked_achievements=sorted(unlocked),
        )

    async def list_achievements(self, owner_id: str) -> list[AchievementStatus]:
        """Every catalog achievement with the user's unlock state."""
        user, tasks = await self._user_and_tasks(owner_id)
        unlocked = evaluate_achievements(user, tasks)
        return [AchievementStatus(a, a.id in unlocked) for a in ACHIEVEMENTS]

    async def leaderboard(self, owner_id: str, limit: int = 10) -> list[LeaderboardEntry]:
        """Top users by total points.

        The requesting user is labelled "You" instead of their name.

        Raises:
            InvalidInputError: If limit is smaller than 1
        """
        if limit < 1:
            raise InvalidInputError("Leaderboard size must be at least 1")

        users = await self.user_repository.list_top(limit)
        return [
            LeaderboardEntry(
                rank=index,
                name=CURRENT_USER_LABEL if user.id == owner_id else user.name,
                username=user.username,
                points=user.total_points,
                level=user.level,
                is_current_user=user.id == owner_id,
            )
            for index, user in enumerate(users, start=1)
        ]


def get_rewards_service() -> RewardsService:
    from taskmaster_cli.services.context_manager import get_strategy_context

    context = get_strategy_context()
    return RewardsService(context.task_repository, context.user_repository)
