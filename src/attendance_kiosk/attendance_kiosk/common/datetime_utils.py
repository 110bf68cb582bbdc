from __future__ import annotations

import re
from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError

_HHMM_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str, field_name: str) -> time:
    """Parse a 24h ``HH:MM`` string (00:00-23:59) into a time of day."""
    value = (value or "").strip()
    if not _HHMM_RE.match(value):
        raise ValidationError(f"{field_name}: invalid time format (HH:MM)")
    hours, minutes = value.split(":")
    return time(hour=int(hours), minute=int(minutes))


def now_utc() -> datetime:
    """Current instant, timezone-aware in UTC.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes from the store as UTC; convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db_utc(value: datetime) -> datetime:
    """Naive UTC datetime for DATETIME columns."""
    return as_utc(value).replace(tzinfo=None)


def day_of_week(value: datetime | date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return (value.weekday() + 1) % 7


def get_timezone(name: str | None) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as e:
        raise ValidationError(f"Unknown timezone: {name}") from e


def today_in(tz: tzinfo) -> date:
    """Calendar date of the current instant in ``tz`` (not the host's local date)."""
    return now_utc().astimezone(tz).date()
