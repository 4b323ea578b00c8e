"""Tests for exit code constants and helpers."""

from taskmaster_cli.utils import exit_codes


def test_values_are_stable():
    assert exit_codes.SUCCESS == 0
    assert exit_codes.ERROR_GENERAL == 1
    assert exit_codes.ERROR_INVALID_ARGS == 2
    assert exit_codes.ERROR_AUTH_FAILURE == 3
    assert exit_codes.ERROR_STORE_FAILURE == 4
    assert exit_codes.ERROR_NOT_FOUND == 5


def test_names_and_descriptions():
    assert exit_codes.get_exit_code_name(5) == "ERROR_NOT_FOUND"
    assert exit_codes.get_exit_code_name(42) == "UNKNOWN(42)"
    assert "not found" in exit_codes.get_exit_code_description(5).lower()
    assert exit_codes.get_exit_code_description(42) == "Unknown error"
