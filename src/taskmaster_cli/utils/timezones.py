"""Time zone resolution for scheduling and analytics."""

from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal

from taskmaster_cli.models.exceptions import InvalidInputError

LOCAL = "local"


def resolve_timezone(name: str) -> tzinfo:
    """Turn a configured zone name into a tzinfo.

    ``"local"`` means the machine's zone as reported by tzlocal; anything
    else must be an IANA name such as ``"UTC"`` or ``"Europe/Berlin"``.

    Raises:
        InvalidInputError: If the zone name is unknown
    """
    if name == LOCAL:
        return tzlocal.get_localzone()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidInputError(f"Unknown timezone: {name}") from e
