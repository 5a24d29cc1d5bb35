"""Timezone-aware calendar date helpers.

A workout day is whatever the wall clock reads in the user's zone, so all
normalization goes through ``zoneinfo`` rather than fixed UTC offsets.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigurationError

DEFAULT_TIMEZONE = "UTC"


def normalize_timezone_name(value: Any) -> str | None:
    """Normalize a timezone name and verify it's a valid IANA name."""
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    if raw.upper() == "UTC":
        return "UTC"
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None
    return raw


def resolve_timezone(name: Any) -> ZoneInfo:
    """Return the ZoneInfo for ``name``; unknown identifiers are a hard error."""
    normalized = normalize_timezone_name(name)
    if normalized is None:
        raise ConfigurationError(
            f"Unknown timezone identifier: {name!r}",
            field="timezone",
        )
    return ZoneInfo(normalized)


def as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def normalize(instant: datetime, tz: str | ZoneInfo) -> date:
    """Project an instant onto its local calendar date in ``tz``."""
    zone = tz if isinstance(tz, ZoneInfo) else resolve_timezone(tz)
    return as_utc(instant).astimezone(zone).date()


def days_between(a: date, b: date) -> int:
    """Absolute number of calendar days separating two dates."""
    return abs((a - b).days)


def week_bounds(today: date) -> tuple[date, date]:
    """Return (Sunday, Saturday) of the Sunday-start week containing ``today``."""
    # date.weekday(): Monday=0 .. Sunday=6
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)
