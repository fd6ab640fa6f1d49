"""Shared time utilities used across the booking engine."""

import re
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so comparisons never mix naive and aware values.

    Examples:
        >>> ensure_aware(datetime(2025, 3, 18, 10, 0)).tzinfo
        datetime.timezone.utc
    """
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_timezone(name: str) -> tzinfo:
    """Resolve a time zone name. ``UTC`` never needs the tz database."""
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    return ZoneInfo(name)


def day_of_week(value: datetime) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return (value.weekday() + 1) % 7


def clock_string(value: datetime) -> str:
    """Zero-padded ``HH:mm`` wall-clock time, seconds truncated."""
    return value.strftime("%H:%M")


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60
