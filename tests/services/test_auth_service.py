"""Tests for AuthService.resolve_owner."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from taskmaster_cli.models.exceptions import AuthenticationError
from taskmaster_cli.services.auth_service import AuthService


@pytest.fixture()
def strategy():
    strategy = MagicMock()
    strategy.ensure_default_user.return_value = "default-user"
    return strategy


@pytest.mark.asyncio
async def test_configured_user_is_used(tmp_config, user_repo, user, strategy):
    tmp_config.set_current_user(user.id)

    owner = await AuthService(tmp_config, user_repo, strategy).resolve_owner()

    assert owner == user.id
    strategy.ensure_default_user.assert_not_called()


@pytest.mark.asyncio
async def test_default_user_adopted_and_remembered(tmp_config, user_repo, strategy):
    owner = await AuthService(tmp_config, user_repo, strategy).resolve_owner()

    assert owner == "default-user"
    assert tmp_config.config.current_user_id == "default-user"


@pytest.mark.asyncio
async def test_missing_configured_user_fails(tmp_config, user_repo, strategy):
    tmp_config.set_current_user("deleted-user")

    with pytest.raises(AuthenticationError):
        await AuthService(tmp_config, user_repo, strategy).resolve_owner()
