"""
Read models returned by the services and serialized by the routes.

Python attributes are snake_case; the JSON wire format is camelCase (timeSlot, calendarId, ...).
"""
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from joincal.core.dates import ensure_utc


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CalendarRecord(WireModel):
    calendar_id: str
    default_color: str
    default_dark_mode: bool = False


class AvailabilityRecord(WireModel):
    """One stored availability row with its resolved joiners."""

    id: int
    calendar_id: str
    date: dt.datetime
    time_slot: str
    location: str
    name: str
    color: str | None = None
    icon: str | None = None
    recurring: bool = False
    section: str = "day"
    joiners: list[str] = Field(default_factory=list)

    @field_validator("date", mode="after")
    @classmethod
    def stored_as_utc(cls, v: dt.datetime) -> dt.datetime:
        return ensure_utc(v)


class Occurrence(AvailabilityRecord):
    """
    A record projected onto one day of the visible window (never persisted).
    Weekly copies of a recurring record share its id; key tells them apart.
    """

    occurrence_date: dt.date
    key: str
    is_original: bool = True
