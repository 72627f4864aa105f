"""Timezone helpers shared by the ledger and the mail flows.

Entities carry aware datetimes in the platform timezone while the database
stores naive values, so every repository goes through :func:`to_storage` and
:func:`from_storage` when crossing that boundary.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from civicmail.config import get_settings

_FALLBACK_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``."""

    name = (get_settings().app_timezone or "").strip()
    return _parse_timezone(name) if name else ZoneInfo(_FALLBACK_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def from_storage(value: datetime | None) -> datetime | None:
    """Attach the platform timezone to a value read from the database."""

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def to_storage(value: datetime | None) -> datetime | None:
    """Convert ``value`` to the naive local representation stored in the DB."""

    localized = from_storage(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def storage_now() -> datetime:
    """Current time in the naive form used by model column defaults."""

    return now_in_app_timezone().replace(tzinfo=None)


def _parse_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(name)
        if match is None:
            return ZoneInfo(_FALLBACK_TIMEZONE)
    sign = -1 if match.group("sign") == "-" else 1
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(sign * offset)


__all__ = [
    "from_storage",
    "get_app_timezone",
    "now_in_app_timezone",
    "storage_now",
    "to_storage",
]
