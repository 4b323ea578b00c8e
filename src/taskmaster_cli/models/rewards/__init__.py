"""Scoring, achievement and analytics rules.

Everything in this package is pure: functions take tasks/users and return
values, and never touch the store.
"""

from .achievements import (
    ACHIEVEMENTS,
    Achievement,
    AchievementCategory,
    evaluate_achievements,
)
from .analytics import (
    DailyBucket,
    DaySummary,
    MonthSummary,
    WindowSummary,
    summarize,
    summarize_day,
    summarize_month,
)
from .scoring import (
    apply_completion,
    calculate_points,
    is_completed_on_time,
    level_for_points,
)

__all__ = [
    "ACHIEVEMENTS",
    "Achievement",
    "AchievementCategory",
    "evaluate_achievements",
    "DailyBucket",
    "DaySummary",
    "MonthSummary",
    "WindowSummary",
    "summarize",
    "summarize_day",
    "summarize_month",
    "apply_completion",
    "calculate_points",
    "is_completed_on_time",
    "level_for_points",
]
