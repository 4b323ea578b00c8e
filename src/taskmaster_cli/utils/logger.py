"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskmaster_cli"
_LOG_FILE = "taskmaster.log"
_LEVEL_ENV = "TASKMASTER_LOG_LEVEL"
_MAX_BYTES = 2 * 1024 * 1024  # 2 MB
_BACKUP_COUNT = 5

_logger: logging.Logger | None = None


def _resolve_level() -> int:
    name = os.environ.get(_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _build_root_logger() -> logging.Logger:
    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_resolve_level())
    logger.propagate = False
    if logger.handlers:
        return logger

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or a child logger for *component*.

    The rotating file handler is attached once, to the root application
    logger; child loggers (``taskmaster_cli.stats``) inherit it.
    """
    global _logger
    if _logger is None:
        _logger = _build_root_logger()
    if component:
        return _logger.getChild(component)
    return _logger
