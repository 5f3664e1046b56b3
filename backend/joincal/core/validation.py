"""
Field checks shared by the calendar registry and the availability store.

Each helper returns the cleaned value or raises ValidationError with a message
the client can show as-is.
"""
from __future__ import annotations

from typing import Any

from joincal.core.constants import (
    CALENDAR_ID_PATTERN,
    HEX_COLOR_PATTERN,
    MSG_INVALID_CALENDAR_ID,
    SECTIONS,
)
from joincal.core.errors import ValidationError

# Wire names used in messages (clients send camelCase)
_WIRE_NAMES = {
    "time_slot": "timeSlot",
    "calendar_id": "calendarId",
}


def wire_name(field: str) -> str:
    return _WIRE_NAMES.get(field, field)


def validate_calendar_id(calendar_id: Any) -> str:
    if not isinstance(calendar_id, str) or not CALENDAR_ID_PATTERN.fullmatch(calendar_id):
        raise ValidationError(MSG_INVALID_CALENDAR_ID)
    return calendar_id


def require_text(field: str, value: Any, max_length: int) -> str:
    """Non-empty string, stripped, at most max_length characters."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{wire_name(field)} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{wire_name(field)} must be a string")
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(f"{wire_name(field)} must be at most {max_length} characters")
    return value


def optional_text(field: str, value: Any, max_length: int) -> str | None:
    if value is None or value == "":
        return None
    return require_text(field, value, max_length)


def validate_color(value: Any, field: str = "color") -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not HEX_COLOR_PATTERN.fullmatch(value):
        raise ValidationError(f"{wire_name(field)} must be a valid hex color (e.g. #FF0000)")
    return value


def validate_section(value: Any) -> str:
    if value not in SECTIONS:
        raise ValidationError(f"section must be one of: {', '.join(SECTIONS)}")
    return value


def validate_bool(field: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{wire_name(field)} must be true or false")
    return value
