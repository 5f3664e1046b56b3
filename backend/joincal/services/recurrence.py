"""
Recurrence expansion: project stored availability onto the days of a visible window.

Only one rule exists: a recurring record repeats every 7 days, forever, from its anchor
(the stored date). Expansion is a pure function of (records, window); nothing here touches
the database and the synthesized occurrences are never persisted.

Join state is tracked per record, not per occurrence, so only the occurrence that falls on
the anchor day carries the record's joiners. Every other weekly copy shows an empty list.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Iterable

from joincal.config import settings
from joincal.core.constants import DEFAULT_WINDOW_DAYS, RECURRENCE_STEP_DAYS
from joincal.core.dates import calendar_zone, ensure_utc, to_calendar_day, today_in
from joincal.services.types import AvailabilityRecord, Occurrence

_STEP = timedelta(days=RECURRENCE_STEP_DAYS)


def occurrence_days(anchor: date, recurring: bool, start: date, end: date) -> list[date]:
    """Days in [start, end] on which a record anchored at anchor appears."""
    if not recurring:
        return [anchor] if start <= anchor <= end else []
    # Jump straight to the first step on/after start; never before the anchor itself.
    steps = max(0, math.ceil((start - anchor).days / RECURRENCE_STEP_DAYS))
    day = anchor + steps * _STEP
    days = []
    while day <= end:
        days.append(day)
        day += _STEP
    return days


def _as_record(event: Any) -> AvailabilityRecord:
    if isinstance(event, AvailabilityRecord):
        return event
    return AvailabilityRecord.model_validate(event)


def _project(record: AvailabilityRecord, day: date, anchor_day: date, tz: tzinfo) -> Occurrence:
    # Keep the anchor's wall-clock time; only the calendar day moves.
    local_anchor = ensure_utc(record.date).astimezone(tz)
    occurrence_at = datetime.combine(day, local_anchor.timetz()).astimezone(timezone.utc)
    is_original = day == anchor_day
    data = record.model_dump()
    data.update(
        date=occurrence_at,
        joiners=list(record.joiners) if is_original else [],
        occurrence_date=day,
        key=f"{record.id}-{day.isoformat()}",
        is_original=is_original,
    )
    return Occurrence(**data)


def expand(
    events: Iterable[Any],
    window_start: date | datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: tzinfo | None = None,
) -> list[Occurrence]:
    """
    Visible occurrences of events inside [window_start, window_start + window_days - 1].

    events may be AvailabilityRecord instances or anything AvailabilityRecord can read
    attributes from (ORM rows). window_start is truncated to its day in tz (UTC by default);
    a naive window_start is already wall-clock time in tz.
    Output is ordered by (day, timeSlot, id).
    """
    if window_days < 1:
        raise ValueError("window_days must be at least 1")
    tz = tz or timezone.utc
    if isinstance(window_start, datetime) and window_start.tzinfo is None:
        start = window_start.date()
    else:
        start = to_calendar_day(window_start, tz)
    end = start + timedelta(days=window_days - 1)

    occurrences: list[Occurrence] = []
    for event in events:
        record = _as_record(event)
        anchor_day = to_calendar_day(record.date, tz)
        for day in occurrence_days(anchor_day, record.recurring, start, end):
            occurrences.append(_project(record, day, anchor_day, tz))
    occurrences.sort(key=lambda o: (o.occurrence_date, o.time_slot, o.id))
    return occurrences


def visible_window(today: date | None = None, days: int | None = None) -> tuple[date, date]:
    """(first, last) day of the default window: today through today + WINDOW_DAYS - 1."""
    tz = calendar_zone(settings.calendar_timezone)
    first = today or today_in(tz)
    return first, first + timedelta(days=(days or settings.window_days) - 1)
