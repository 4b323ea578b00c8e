"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from taskmaster_cli.models.exceptions import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    StoreFailureError,
    TaskMasterError,
)
from taskmaster_cli.utils import exit_codes
from taskmaster_cli.utils.logger import get_logger
from taskmaster_cli.utils.ui.formatters import format_error

_EXIT_CODES: dict[type[Exception], int] = {
    NotFoundError: exit_codes.ERROR_NOT_FOUND,
    InvalidInputError: exit_codes.ERROR_INVALID_ARGS,
    ValidationError: exit_codes.ERROR_INVALID_ARGS,
    AuthenticationError: exit_codes.ERROR_AUTH_FAILURE,
    StoreFailureError: exit_codes.ERROR_STORE_FAILURE,
}


def exit_code_for(error: Exception) -> int:
    """Map a domain error to its semantic exit code."""
    for error_type, code in _EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return exit_codes.ERROR_GENERAL


def command_wrapper(func: Callable):
    """Run a (possibly async) command with logging and error-to-exit-code mapping."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except (TaskMasterError, ValidationError) as e:
            elapsed = time.monotonic() - start
            code = exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) - %s: %s",
                cmd,
                elapsed,
                exit_codes.get_exit_code_name(code),
                str(e),
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except typer.Exit:
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
