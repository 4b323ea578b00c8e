"""Tests for 'taskmaster rewards' commands."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from taskmaster_cli.commands.rewards_command import app
from taskmaster_cli.models import AppConfig
from taskmaster_cli.models.exceptions import NotFoundError
from taskmaster_cli.models.rewards.achievements import get_achievement
from taskmaster_cli.services.rewards_service import (
    AchievementStatus,
    LeaderboardEntry,
    RewardsSummary,
)

runner = CliRunner()


@pytest.fixture()
def service():
    svc = MagicMock()
    svc.get_rewards = AsyncMock(
        return_value=RewardsSummary(
            total_points=145,
            level=2,
            current_streak=3,
            tasks_completed=9,
            on_time_completed=6,
            badges_earned=2,
            unlocked_achievements=[1, 5],
        )
    )
    svc.list_achievements = AsyncMock(
        return_value=[
            AchievementStatus(get_achievement(1), True),
            AchievementStatus(get_achievement(2), False),
        ]
    )
    svc.leaderboard = AsyncMock(
        return_value=[
            LeaderboardEntry(1, "Bob", "bob", 300, 4, False),
            LeaderboardEntry(2, "You", "alice", 145, 2, True),
        ]
    )
    config_svc = MagicMock()
    config_svc.config = AppConfig()
    with (
        patch("taskmaster_cli.commands.rewards_command.resolve_owner", AsyncMock(return_value="user-001")),
        patch("taskmaster_cli.commands.rewards_command.get_rewards_service", return_value=svc),
        patch("taskmaster_cli.commands.rewards_command.get_config_service", return_value=config_svc),
        patch("taskmaster_cli.commands.options.get_config_service", return_value=config_svc),
    ):
        yield svc


def test_summary_pretty(service):
    result = runner.invoke(app, ["summary"])
    assert result.exit_code == 0, result.output
    assert "Level 2" in result.output
    assert "145" in result.output


def test_summary_json(service):
    result = runner.invoke(app, ["summary", "-o", "json"])
    data = json.loads(result.output)
    assert data["total_points"] == 145
    assert data["unlocked_achievements"] == [1, 5]


def test_achievements_unlocked_only(service):
    result = runner.invoke(app, ["achievements", "--unlocked", "-o", "json"])
    data = json.loads(result.output)
    assert [a["id"] for a in data] == [1]


def test_achievements_pretty(service):
    result = runner.invoke(app, ["achievements"])
    assert result.exit_code == 0
    assert "First Step" in result.output
    assert "Getting Started" in result.output


def test_leaderboard_uses_config_size(service):
    result = runner.invoke(app, ["leaderboard", "-o", "json"])
    assert result.exit_code == 0
    service.leaderboard.assert_awaited_once_with("user-001", 10)
    assert json.loads(result.output)[1]["name"] == "You"


def test_leaderboard_limit_option(service):
    runner.invoke(app, ["leaderboard", "--limit", "3", "-o", "yaml"])
    service.leaderboard.assert_awaited_once_with("user-001", 3)


def test_unknown_user_exit_code(service):
    service.get_rewards.side_effect = NotFoundError("User not found: user-001")
    result = runner.invoke(app, ["summary"])
    assert result.exit_code == 5
