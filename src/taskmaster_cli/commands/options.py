"""Options shared by several commands."""

from typing import Annotated

import typer

from taskmaster_cli.models.exceptions import InvalidInputError
from taskmaster_cli.services.config_service import get_config_service
from taskmaster_cli.utils.ui.formatters import OUTPUT_FORMATS

OutputOption = Annotated[
    str | None,
    typer.Option(
        "--output", "-o", help="Output format: pretty, json or yaml (default: config)"
    ),
]


def resolve_output_format(output: str | None) -> str:
    """Explicit ``--output`` wins over the configured ``output.format``."""
    if output is None:
        return get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise InvalidInputError(
            f"Unknown output format '{output}', expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
    return output
