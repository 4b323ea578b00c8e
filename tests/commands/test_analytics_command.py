"""Tests for 'taskmaster analytics' commands."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from taskmaster_cli.commands.analytics_command import app
from taskmaster_cli.models import AppConfig
from taskmaster_cli.models.exceptions import InvalidInputError
from taskmaster_cli.models.rewards.analytics import DailyBucket, MonthSummary, WindowSummary

runner = CliRunner()


@pytest.fixture()
def service():
    svc = MagicMock()
    svc.window_summary = AsyncMock(
        return_value=WindowSummary(
            window_days=2,
            total=10,
            completed=3,
            on_time_completed=2,
            completion_rate=30,
            on_time_rate=67,
            avg_per_day=5.0,
            daily_buckets=[
                DailyBucket(date(2024, 3, 14), 6, 2),
                DailyBucket(date(2024, 3, 15), 4, 1),
            ],
        )
    )
    svc.monthly_summary = AsyncMock(return_value=MonthSummary(2024, 2, 4, 3, 75))
    svc.today_summary = AsyncMock(
        return_value={
            "date": "2024-03-15",
            "total": 2,
            "completed": 1,
            "pending": 1,
            "on_time_completed": 1,
            "total_points": 20,
        }
    )
    config_svc = MagicMock()
    config_svc.config = AppConfig()
    with (
        patch("taskmaster_cli.commands.analytics_command.resolve_owner", AsyncMock(return_value="user-001")),
        patch("taskmaster_cli.commands.analytics_command.get_analytics_service", return_value=svc),
        patch("taskmaster_cli.commands.analytics_command.get_config_service", return_value=config_svc),
        patch("taskmaster_cli.commands.options.get_config_service", return_value=config_svc),
    ):
        yield svc


def test_summary_default_window(service):
    result = runner.invoke(app, ["summary", "-o", "json"])
    assert result.exit_code == 0, result.output
    service.window_summary.assert_awaited_once_with("user-001", 30)
    data = json.loads(result.output)
    assert data["completion_rate"] == 30
    assert data["daily_buckets"][0]["date"] == "2024-03-14"


def test_summary_pretty(service):
    result = runner.invoke(app, ["summary", "--days", "2"])
    assert result.exit_code == 0, result.output
    assert "30%" in result.output
    service.window_summary.assert_awaited_once_with("user-001", 2)


def test_summary_invalid_window(service):
    service.window_summary.side_effect = InvalidInputError("window_days must be at least 1")
    result = runner.invoke(app, ["summary", "--days", "0"])
    assert result.exit_code == 2


def test_monthly(service):
    result = runner.invoke(app, ["monthly", "2024-02", "-o", "json"])
    assert result.exit_code == 0
    service.monthly_summary.assert_awaited_once_with("user-001", 2024, 2)
    assert json.loads(result.output)["completion_rate"] == 75


def test_monthly_current(service):
    runner.invoke(app, ["monthly", "-o", "json"])
    service.monthly_summary.assert_awaited_once_with("user-001", None, None)


def test_today(service):
    result = runner.invoke(app, ["today", "-o", "yaml"])
    assert result.exit_code == 0
    assert "total_points: 20" in result.output
