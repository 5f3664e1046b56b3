"""Per-request calendar scope: which calendar namespace a call touches and who is asking."""
from __future__ import annotations

from dataclasses import dataclass, field

from joincal.config import settings


@dataclass(frozen=True)
class CalendarContext:
    # DEFAULT_CALENDAR_ID when the request names no calendar
    calendar_id: str = field(default_factory=lambda: settings.default_calendar_id)
    participant_name: str | None = None
