"""Tests for command decorators."""

import pytest
import typer
from pydantic import BaseModel, ValidationError

from taskmaster_cli.commands.decorators import command_wrapper, exit_code_for
from taskmaster_cli.models.exceptions import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    StoreFailureError,
    TaskMasterError,
)


class _Model(BaseModel):
    count: int


def _validation_error() -> ValidationError:
    try:
        _Model(count="many")
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


@pytest.mark.parametrize(
    "error, code",
    [
        (NotFoundError("x"), 5),
        (InvalidInputError("x"), 2),
        (AuthenticationError("x"), 3),
        (StoreFailureError("x"), 4),
        (TaskMasterError("x"), 1),
        (RuntimeError("x"), 1),
    ],
)
def test_exit_code_for(error, code):
    assert exit_code_for(error) == code


def test_exit_code_for_validation_error():
    assert exit_code_for(_validation_error()) == 2


def test_wrapper_returns_sync_result():
    @command_wrapper
    def cmd():
        return 42

    assert cmd() == 42


def test_wrapper_runs_coroutines():
    @command_wrapper
    async def cmd(value):
        return value * 2

    assert cmd(21) == 42


def test_wrapper_maps_domain_errors(capsys):
    @command_wrapper
    async def cmd():
        raise NotFoundError("Task not found: t-1")

    with pytest.raises(typer.Exit) as exc_info:
        cmd()

    assert exc_info.value.exit_code == 5
    assert "Task not found" in capsys.readouterr().out


def test_wrapper_maps_unexpected_errors():
    @command_wrapper
    def cmd():
        raise KeyError("boom")

    with pytest.raises(typer.Exit) as exc_info:
        cmd()
    assert exc_info.value.exit_code == 1


def test_wrapper_passes_exit_through():
    @command_wrapper
    def cmd():
        raise typer.Exit(0)

    with pytest.raises(typer.Exit) as exc_info:
        cmd()
    assert exc_info.value.exit_code == 0
