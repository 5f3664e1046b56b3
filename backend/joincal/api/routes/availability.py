"""
Availability API: calendar-scoped CRUD plus join/unjoin on one event.

Calendar identified by ?calendarId= or X-Calendar-Id header (default DEFAULT_CALENDAR_ID).
Participant for join/unjoin/toggle comes from body.name or X-Participant-Name.
GET / returns stored records; weekly expansion is done by the client, or by
GET /occurrences for clients that want the server to do it.
"""
import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, Header, Query, Response
from pydantic import ConfigDict, Field
from sqlalchemy.orm import Session

from joincal.config import settings
from joincal.core.context import CalendarContext
from joincal.core.dates import calendar_zone
from joincal.db.session import get_db
from joincal.services import availability_service, membership_service
from joincal.services.recurrence import expand, visible_window
from joincal.services.types import AvailabilityRecord, Occurrence, WireModel

router = APIRouter()
logger = logging.getLogger(__name__)


def calendar_context(
    x_calendar_id: str | None = Header(None, alias="X-Calendar-Id"),
    calendar_id: str | None = Query(None, alias="calendarId"),
    x_participant_name: str | None = Header(None, alias="X-Participant-Name"),
) -> CalendarContext:
    cid = (calendar_id or x_calendar_id or "").strip() or settings.default_calendar_id
    name = (x_participant_name or "").strip() or None
    return CalendarContext(calendar_id=cid, participant_name=name)


# --- Bodies ---


class AvailabilityCreate(WireModel):
    model_config = ConfigDict(extra="ignore")

    calendar_id: str | None = None
    date: str | None = Field(None, description="ISO date or datetime; naive values are CALENDAR_TIMEZONE wall-clock")
    time_slot: str | None = None
    location: str | None = None
    name: str | None = None
    color: str | None = None
    icon: str | None = None
    recurring: bool | None = None
    section: str | None = None


class AvailabilityUpdate(WireModel):
    """Only these fields are editable; name/color/date/joiners in the body are dropped."""

    model_config = ConfigDict(extra="ignore")

    time_slot: str | None = None
    location: str | None = None
    icon: str | None = None
    recurring: bool | None = None
    section: str | None = None


class JoinRequest(WireModel):
    name: str | None = Field(None, description="Participant joining or leaving")


# --- Read ---


@router.get("", response_model=list[AvailabilityRecord])
def list_availability(
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> list[AvailabilityRecord]:
    """Every stored record in the calendar (recurring ones once, at their anchor)."""
    return availability_service.list_availabilities(db, ctx.calendar_id)


@router.get("/occurrences", response_model=list[Occurrence])
def list_occurrences(
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
    start: date | None = Query(None, description="First visible day (default: today in CALENDAR_TIMEZONE)"),
    days: int | None = Query(None, ge=1, le=31),
) -> list[Occurrence]:
    """Records expanded onto the visible window; weekly repeats share id, differ by key."""
    first, last = visible_window(start, days)
    records = availability_service.list_availabilities(db, ctx.calendar_id)
    return expand(records, first, (last - first).days + 1, calendar_zone(settings.calendar_timezone))


@router.get("/{event_id}", response_model=AvailabilityRecord)
def get_availability(
    event_id: int,
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> AvailabilityRecord:
    return availability_service.get_availability(db, ctx.calendar_id, event_id)


# --- Write ---


@router.post("", response_model=AvailabilityRecord, status_code=201)
def create_availability(
    body: AvailabilityCreate,
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> AvailabilityRecord:
    """
    Post a slot. body.calendarId wins over the query/header scope; when neither is
    given the event lands in DEFAULT_CALENDAR_ID.
    """
    data: dict[str, Any] = body.model_dump(exclude_none=True)
    return availability_service.create_availability(db, data, calendar_id=body.calendar_id or ctx.calendar_id)


@router.put("/{event_id}", response_model=AvailabilityRecord)
def update_availability(
    event_id: int,
    body: AvailabilityUpdate,
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> AvailabilityRecord:
    return availability_service.update_availability(db, ctx.calendar_id, event_id, body.model_dump(exclude_unset=True))


@router.delete("/{event_id}", status_code=204)
def delete_availability(
    event_id: int,
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> Response:
    availability_service.delete_availability(db, ctx.calendar_id, event_id)
    return Response(status_code=204)


# --- Membership ---


@router.post("/{event_id}/join", response_model=AvailabilityRecord)
def join_availability(
    event_id: int,
    body: JoinRequest | None = None,
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> AvailabilityRecord:
    """Add body.name to joiners (no-op if already there)."""
    return membership_service.join(db, ctx, event_id, body.name if body else None)


@router.post("/{event_id}/unjoin", response_model=AvailabilityRecord)
def unjoin_availability(
    event_id: int,
    body: JoinRequest | None = None,
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> AvailabilityRecord:
    """Remove body.name from joiners (no-op if absent)."""
    return membership_service.unjoin(db, ctx, event_id, body.name if body else None)


@router.post("/{event_id}/toggle", response_model=AvailabilityRecord)
def toggle_availability(
    event_id: int,
    body: JoinRequest | None = None,
    db: Session = Depends(get_db),
    ctx: CalendarContext = Depends(calendar_context),
) -> AvailabilityRecord:
    return membership_service.toggle_membership(db, ctx, event_id, body.name if body else None)
