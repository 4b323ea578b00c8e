"""Achievement catalog and unlock evaluation.

Unlock status is never stored. Each call recomputes it from the user's
current totals and task history, so deleting tasks can relock a badge and
there is no earned-flag to drift out of date.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from taskmaster_cli.models.core import Task, User

EARLY_HOUR_CUTOFF = 8
LATE_HOUR_CUTOFF = 22


class AchievementCategory(str, Enum):
    """What an achievement's requirement is measured against."""

    TASKS_COMPLETED = "tasksCompleted"
    ON_TIME_COMPLETED = "onTimeCompleted"
    STREAK = "streak"
    EARLY_TASK = "earlyTask"
    LATE_TASK = "lateTask"
    TOTAL_POINTS = "totalPoints"


@dataclass(frozen=True)
class Achievement:
    """Represents an achievement badge."""

    id: int
    name: str
    description: str
    icon: str
    requirement: int
    category: AchievementCategory


# Ids are stable; 11 was a "perfect week" badge that is not part of the catalog.
ACHIEVEMENTS: tuple[Achievement, ...] = (
    # Completion milestones
    Achievement(
        1,
        "First Step",
        "Complete your first task",
        "🌱",
        1,
        AchievementCategory.TASKS_COMPLETED,
    ),
    Achievement(
        2,
        "Getting Started",
        "Complete 10 tasks",
        "🎯",
        10,
        AchievementCategory.TASKS_COMPLETED,
    ),
    Achievement(
        3,
        "Task Master",
        "Complete 50 tasks",
        "⭐",
        50,
        AchievementCategory.TASKS_COMPLETED,
    ),
    Achievement(
        4,
        "Century Club",
        "Complete 100 tasks",
        "💯",
        100,
        AchievementCategory.TASKS_COMPLETED,
    ),
    # Punctuality
    Achievement(
        5,
        "Punctual",
        "Complete 5 tasks on time",
        "⏰",
        5,
        AchievementCategory.ON_TIME_COMPLETED,
    ),
    Achievement(
        6,
        "Time Lord",
        "Complete 25 tasks on time",
        "⌛",
        25,
        AchievementCategory.ON_TIME_COMPLETED,
    ),
    # Streaks
    Achievement(
        7,
        "Hot Streak",
        "7-day completion streak",
        "🔥",
        7,
        AchievementCategory.STREAK,
    ),
    Achievement(
        8,
        "Unstoppable",
        "30-day completion streak",
        "🏆",
        30,
        AchievementCategory.STREAK,
    ),
    # Special
    Achievement(
        9,
        "Early Bird",
        "Complete a task scheduled before 8 AM",
        "🌅",
        1,
        AchievementCategory.EARLY_TASK,
    ),
    Achievement(
        10,
        "Night Owl",
        "Complete a task scheduled at 10 PM or later",
        "🦉",
        1,
        AchievementCategory.LATE_TASK,
    ),
    Achievement(
        12,
        "Legend",
        "Earn 1000 points",
        "👑",
        1000,
        AchievementCategory.TOTAL_POINTS,
    ),
)


def get_achievement(achievement_id: int) -> Achievement | None:
    """Look up a catalog entry by id."""
    for achievement in ACHIEVEMENTS:
        if achievement.id == achievement_id:
            return achievement
    return None


def count_completed(tasks: Iterable[Task]) -> int:
    return sum(1 for t in tasks if t.completed)


def count_on_time(tasks: Iterable[Task]) -> int:
    return sum(1 for t in tasks if t.completed_on_time)


def is_unlocked(achievement: Achievement, user: User, tasks: list[Task]) -> bool:
    """Check if a single achievement's requirement is met."""
    category = achievement.category
    requirement = achievement.requirement

    if category is AchievementCategory.TASKS_COMPLETED:
        return count_completed(tasks) >= requirement

    if category is AchievementCategory.ON_TIME_COMPLETED:
        return count_on_time(tasks) >= requirement

    if category is AchievementCategory.STREAK:
        return user.current_streak >= requirement

    if category is AchievementCategory.TOTAL_POINTS:
        return user.total_points >= requirement

    if category is AchievementCategory.EARLY_TASK:
        return any(t.completed and t.scheduled_hour < EARLY_HOUR_CUTOFF for t in tasks)

    if category is AchievementCategory.LATE_TASK:
        return any(t.completed and t.scheduled_hour >= LATE_HOUR_CUTOFF for t in tasks)

    return False


def evaluate_achievements(
    user: User,
    tasks: Iterable[Task],
    catalog: Iterable[Achievement] = ACHIEVEMENTS,
) -> frozenset[int]:
    """Compute the ids of every currently unlocked achievement.

    Args:
        user: Owner whose ``total_points`` and ``current_streak`` are used
        tasks: All of the owner's tasks
        catalog: Achievement table to evaluate against

    Returns:
        Frozen set of unlocked achievement ids
    """
    task_list = list(tasks)
    return frozenset(a.id for a in catalog if is_unlocked(a, user, task_list))
