"""User service - registration, switching and streak bookkeeping."""

from __future__ import annotations

from pydantic import ValidationError

from taskmaster_cli.models import User, UserCreate
from taskmaster_cli.models.exceptions import InvalidInputError
from taskmaster_cli.repositories import UserRepository
from taskmaster_cli.services.config_service import ConfigService
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("users")


class UserService:
    """Service for user accounts."""

    def __init__(self, user_repository: UserRepository, config_service: ConfigService):
        self.repository = user_repository
        self.config_service = config_service

    async def register(
        self,
        name: str,
        username: str,
        email: str | None = None,
        *,
        activate: bool = True,
    ) -> User:
        """Register a new user and, by default, make them the active user.

        Raises:
            InvalidInputError: If a field is invalid or the username is taken
        """
        try:
            user_data = UserCreate(name=name, username=username, email=email)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or "input"
            raise InvalidInputError(f"Invalid {field}: {first.get('msg')}") from e

        user = await self.repository.add(user_data)
        logger.info("registered user %s (%s)", user.username, user.id)
        if activate:
            self.config_service.set_current_user(user.id)
        return user

    async def use(self, username: str) -> User:
        """Switch the active user by username."""
        user = await self.repository.get_by_username(username)
        self.config_service.set_current_user(user.id)
        logger.info("switched active user to %s", user.id)
        return user

    async def get(self, user_id: str) -> User:
        return await self.repository.get(user_id)

    async def set_streak(self, user_id: str, streak: int) -> User:
        """Record the current streak reported by the streak tracker."""
        return await self.repository.set_streak(user_id, streak)


def get_user_service() -> UserService:
    from taskmaster_cli.services.config_service import get_config_service
    from taskmaster_cli.services.context_manager import get_strategy_context

    return UserService(get_strategy_context().user_repository, get_config_service())
