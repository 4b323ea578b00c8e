"""Shared Rich consoles for TaskMaster CLI output."""

import os

from rich.console import Console

# highlight flag -> console
_consoles: dict[bool, Console] = {}
_color = True


def _no_color() -> bool:
    return not _color or bool(os.environ.get("NO_COLOR"))


def get_console(highlight: bool = True) -> Console:
    """Get the shared console for *highlight*, creating it on first use."""
    console = _consoles.get(highlight)
    if console is None:
        console = Console(highlight=highlight, no_color=_no_color())
        _consoles[highlight] = console
    return console


def set_color(enabled: bool) -> None:
    """Turn colored output on or off for all shared consoles.

    ``NO_COLOR`` in the environment keeps color off either way.
    """
    global _color
    _color = enabled
    for console in _consoles.values():
        console.no_color = _no_color()


def color_enabled() -> bool:
    return not _no_color()
