"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from taskmaster_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskmaster_cli.utils.ui.console import get_console


def suggest_commands(attempted: str, names: list[str], limit: int = 3) -> list[str]:
    """Command names close to *attempted*, best match first."""
    return get_close_matches(attempted, sorted(names), n=limit, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Command group that answers a mistyped command with "did you mean" hints.

    Unknown commands without a close match keep Click's own usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            suggestions = suggest_commands(args[0], list(self.commands)) if args else []
            if not suggestions:
                raise

            console = get_console(highlight=False)
            console.print(f"[red]Error:[/red] no command '{args[0]}' in '{ctx.info_name}'")
            console.print("[yellow]Did you mean:[/yellow] " + ", ".join(suggestions))
            raise typer.Exit(ERROR_INVALID_ARGS) from e
