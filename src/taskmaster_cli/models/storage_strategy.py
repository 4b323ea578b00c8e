"""
Strategy Pattern: Storage Strategy Container

The StorageStrategyContext holds the storage strategy chosen at startup and
injects its repositories into services. Services never know which backend
they are talking to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskmaster_cli.repositories import TaskRepository, UserRepository


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy encapsulates ALL repository implementations for a given
    storage backend.
    """

    @abstractmethod
    def get_task_repository(self) -> TaskRepository:
        """Get task repository implementation for this strategy."""

    @abstractmethod
    def get_user_repository(self) -> UserRepository:
        """Get user repository implementation for this strategy."""

    @abstractmethod
    def ensure_default_user(self) -> str:
        """Return the id of the store's default user, creating it if needed."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class LocalStorageStrategy(StorageStrategy):
    """
    Local SQLite storage strategy.

    Both repositories share one SQLite connection.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

        # Import here to avoid circular dependencies
        from taskmaster_cli.adapters.sqlite import (
            SqliteTaskRepository,
            SqliteUserRepository,
            get_connection,
        )

        self._connection = get_connection(db_path)
        self._task_repo = SqliteTaskRepository(db_path=db_path, connection=self._connection)
        self._user_repo = SqliteUserRepository(db_path=db_path, connection=self._connection)

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    def get_user_repository(self) -> UserRepository:
        return self._user_repo

    def ensure_default_user(self) -> str:
        from taskmaster_cli.adapters.sqlite import get_or_create_local_user

        return get_or_create_local_user(self._connection)

    @property
    def storage_type(self) -> str:
        return "local"


class StorageStrategyContext:
    """Holds the active storage strategy and exposes its repositories."""

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    @property
    def strategy(self) -> StorageStrategy:
        return self._strategy

    @property
    def task_repository(self) -> TaskRepository:
        return self._strategy.get_task_repository()

    @property
    def user_repository(self) -> UserRepository:
        return self._strategy.get_user_repository()

    @property
    def storage_type(self) -> str:
        return self._strategy.storage_type
