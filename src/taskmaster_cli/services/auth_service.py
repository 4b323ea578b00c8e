"""Service for resolving the authenticated owner of every operation."""

from __future__ import annotations

from taskmaster_cli.models.exceptions import AuthenticationError, NotFoundError
from taskmaster_cli.models.storage_strategy import StorageStrategy
from taskmaster_cli.repositories import UserRepository
from taskmaster_cli.services.config_service import ConfigService
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("auth")


class AuthService:
    """Turns the configured active user into a verified owner id."""

    def __init__(
        self,
        config_service: ConfigService,
        user_repository: UserRepository,
        strategy: StorageStrategy,
    ):
        self.config_service = config_service
        self.user_repository = user_repository
        self.strategy = strategy

    async def resolve_owner(self) -> str:
        """Return the id of the user that operations act on.

        With no active user configured, the store's default local user is
        adopted (created on first use) and remembered in the configuration.

        Raises:
            AuthenticationError: If the configured user no longer exists
        """
        user_id = self.config_service.config.current_user_id
        if user_id is None:
            user_id = self.strategy.ensure_default_user()
            self.config_service.set_current_user(user_id)
            logger.info("adopted default local user %s", user_id)
            return user_id

        try:
            await self.user_repository.get(user_id)
        except NotFoundError as e:
            raise AuthenticationError(
                "Active user no longer exists. Run 'taskmaster users use <username>'."
            ) from e
        return user_id


def get_auth_service() -> AuthService:
    from taskmaster_cli.services.config_service import get_config_service
    from taskmaster_cli.services.context_manager import get_strategy_context

    context = get_strategy_context()
    return AuthService(get_config_service(), context.user_repository, context.strategy)


async def resolve_owner() -> str:
    """Shortcut used by commands."""
    return await get_auth_service().resolve_owner()
