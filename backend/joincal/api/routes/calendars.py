"""
Calendars API: list, fetch, create and delete calendar namespaces.
Deleting a calendar also deletes every availability posted on it.
"""
import logging

from fastapi import APIRouter, Depends, Response
from pydantic import ConfigDict
from sqlalchemy.orm import Session

from joincal.db.session import get_db
from joincal.services import calendar_service
from joincal.services.types import CalendarRecord, WireModel

router = APIRouter()
logger = logging.getLogger(__name__)


class CalendarCreate(WireModel):
    model_config = ConfigDict(extra="ignore")

    calendar_id: str | None = None
    default_color: str | None = None
    default_dark_mode: bool | None = None


@router.get("", response_model=list[CalendarRecord])
def list_calendars(db: Session = Depends(get_db)) -> list[CalendarRecord]:
    return calendar_service.list_calendars(db)


@router.get("/{calendar_id}", response_model=CalendarRecord)
def get_calendar(calendar_id: str, db: Session = Depends(get_db)) -> CalendarRecord:
    """Calendar defaults (color, dark mode) for a client's first visit."""
    return calendar_service.get_calendar(db, calendar_id)


@router.post("", response_model=CalendarRecord, status_code=201)
def create_calendar(body: CalendarCreate, db: Session = Depends(get_db)) -> CalendarRecord:
    """400 for a malformed id, 409 when it is already taken."""
    return calendar_service.create_calendar(
        db,
        body.calendar_id,
        default_color=body.default_color,
        default_dark_mode=body.default_dark_mode,
    )


@router.delete("/{calendar_id}", status_code=204)
def delete_calendar(calendar_id: str, db: Session = Depends(get_db)) -> Response:
    calendar_service.delete_calendar(db, calendar_id)
    return Response(status_code=204)
