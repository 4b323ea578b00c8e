"""Services module for TaskMaster CLI - Business logic layer."""

from .analytics_service import AnalyticsService
from .auth_service import AuthService
from .export_service import ExportService, ExportSummary
from .rewards_service import (
    AchievementStatus,
    LeaderboardEntry,
    RewardsService,
    RewardsSummary,
)
from .stats_service import StatsService, UserLockRegistry
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "TaskService",
    "StatsService",
    "UserLockRegistry",
    "RewardsService",
    "RewardsSummary",
    "AchievementStatus",
    "LeaderboardEntry",
    "AnalyticsService",
    "ExportService",
    "ExportSummary",
    "AuthService",
    "UserService",
]
