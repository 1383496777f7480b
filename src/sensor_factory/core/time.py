"""Timezone resolution helpers."""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_LOCALTIME = Path("/etc/localtime")


def guess_timezone_name() -> str:
    """Return the IANA name of the host's local timezone, or ``"UTC"``."""
    env_name = os.environ.get("TZ", "").lstrip(":")
    if env_name:
        return env_name
    try:
        target = str(_LOCALTIME.resolve())
    except OSError:
        return "UTC"
    marker = "zoneinfo/"
    if marker in target:
        return target.split(marker, 1)[1]
    return "UTC"


def resolve_timezone(name: str | None) -> ZoneInfo:
    """Return the zone for ``name``, guessing the host's zone when it is None.

    Raises:
        ValueError: If ``name`` is not a known timezone identifier.
    """
    zone_name = name or guess_timezone_name()
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {zone_name!r}") from exc
