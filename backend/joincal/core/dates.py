"""
Date helpers: stored instants are UTC; calendar days are taken in the calendar timezone.
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from joincal.core.errors import ValidationError


def calendar_zone(name: str | None) -> tzinfo:
    """ZoneInfo for name; UTC when name is empty."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def ensure_utc(dt: datetime) -> datetime:
    """Naive values are already UTC (SQLite hands them back without tzinfo)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_calendar_day(instant: datetime | date, tz: tzinfo | None = None) -> date:
    """Truncate an instant to its calendar day as seen in tz."""
    if not isinstance(instant, datetime):
        return instant
    return ensure_utc(instant).astimezone(tz or timezone.utc).date()


def parse_instant(value: datetime | date | str, tz: tzinfo | None = None) -> datetime:
    """
    Client-supplied anchor -> aware UTC datetime.
    Naive values and bare dates are wall-clock times in tz (the calendar's zone).
    """
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(raw)
        except ValueError as e:
            raise ValidationError("date must be an ISO 8601 date or datetime") from e
    if not isinstance(value, datetime):
        if not isinstance(value, date):
            raise ValidationError("date must be an ISO 8601 date or datetime")
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz or timezone.utc)
    return value.astimezone(timezone.utc)


def today_in(tz: tzinfo | None = None) -> date:
    return datetime.now(tz or timezone.utc).date()
