"""Bootstrap of the storage strategy.

Usage Pattern:
    from taskmaster_cli.services.context_manager import get_strategy_context

    strategy = get_strategy_context()
    tasks = await strategy.task_repository.list_by_owner(owner_id, filters)
"""

from __future__ import annotations

from functools import lru_cache

from taskmaster_cli.models.storage_strategy import (
    LocalStorageStrategy,
    StorageStrategyContext,
)
from taskmaster_cli.services.config_service import get_config_service
from taskmaster_cli.utils.logger import get_logger

logger = get_logger("context")


@lru_cache(maxsize=1)
def get_strategy_context() -> StorageStrategyContext:
    """Get a cached StorageStrategyContext for the configured database."""
    config_svc = get_config_service()
    db_path = config_svc.db_path
    logger.debug("using local storage at %s", db_path)
    return StorageStrategyContext(LocalStorageStrategy(db_path=db_path))
