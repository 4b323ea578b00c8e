"""Tests for ConfigService."""

from __future__ import annotations

import json

import pytest

from taskmaster_cli.models.exceptions import InvalidInputError


def test_first_load_writes_defaults(tmp_config):
    config = tmp_config.load_config()
    assert config.output.format == "pretty"
    assert tmp_config.config_path.exists()


def test_db_path_defaults_to_data_dir(tmp_config, tmp_path):
    assert tmp_config.db_path == str(tmp_path / "taskmaster.db")
    tmp_config.set("storage.db_path", "/tmp/other.db")
    assert tmp_config.db_path == "/tmp/other.db"


def test_get_dot_key(tmp_config):
    assert tmp_config.get("analytics.default_window_days") == 30


def test_get_unknown_key(tmp_config):
    with pytest.raises(InvalidInputError):
        tmp_config.get("analytics.nope")


def test_set_persists(tmp_config):
    tmp_config.set("rewards.leaderboard_size", 5)

    saved = json.loads(tmp_config.config_path.read_text())
    assert saved["rewards"]["leaderboard_size"] == 5


def test_set_invalid_value_keeps_previous(tmp_config):
    with pytest.raises(InvalidInputError):
        tmp_config.set("output.format", "xml")
    assert tmp_config.config.output.format == "pretty"


def test_reset_keeps_active_user(tmp_config):
    tmp_config.set_current_user("user-1")
    tmp_config.set("analytics.timezone", "UTC")

    config = tmp_config.reset_config()

    assert config.current_user_id == "user-1"
    assert config.analytics.timezone == "local"


def test_corrupt_config_raises(tmp_config):
    tmp_config.config_path.write_text("{not json")
    tmp_config._config = None
    with pytest.raises(RuntimeError):
        tmp_config.load_config()
