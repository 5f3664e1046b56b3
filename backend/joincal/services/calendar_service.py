"""
Calendar registry: create, look up and delete calendar namespaces.
Deleting a calendar cascades to every availability row with the same calendar_id.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from joincal.config import settings
from joincal.core.constants import DEFAULT_CALENDAR_COLOR
from joincal.core.errors import Conflict, NotFound
from joincal.core.validation import validate_bool, validate_calendar_id, validate_color
from joincal.db.dialect import insert_ignore
from joincal.models.availability import Availability, AvailabilityJoiner
from joincal.models.calendar import Calendar
from joincal.services.types import CalendarRecord

logger = logging.getLogger(__name__)


def _get_row(db: Session, calendar_id: str) -> Calendar | None:
    return db.query(Calendar).filter(Calendar.calendar_id == calendar_id).first()


def list_calendars(db: Session) -> list[CalendarRecord]:
    rows = db.query(Calendar).order_by(Calendar.calendar_id.asc()).all()
    return [CalendarRecord.model_validate(r) for r in rows]


def get_calendar(db: Session, calendar_id: str) -> CalendarRecord:
    row = _get_row(db, calendar_id)
    if row is None:
        raise NotFound("Calendar not found")
    return CalendarRecord.model_validate(row)


def create_calendar(
    db: Session,
    calendar_id: str,
    default_color: str | None = None,
    default_dark_mode: bool | None = None,
) -> CalendarRecord:
    """
    Register a new calendar. Raises ValidationError for a malformed id or color and
    Conflict when the id is taken (checked up front and again by the unique index).
    """
    calendar_id = validate_calendar_id(calendar_id)
    color = validate_color(default_color, "defaultColor") or DEFAULT_CALENDAR_COLOR
    dark_mode = False if default_dark_mode is None else validate_bool("defaultDarkMode", default_dark_mode)

    if _get_row(db, calendar_id) is not None:
        raise Conflict("Calendar ID already exists")
    row = Calendar(calendar_id=calendar_id, default_color=color, default_dark_mode=dark_mode)
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("Calendar ID already exists") from e
    db.refresh(row)
    logger.info("Created calendar %s", calendar_id)
    return CalendarRecord.model_validate(row)


def delete_calendar(db: Session, calendar_id: str) -> int:
    """
    Remove the calendar, then every availability (and joiner) in it.
    Two commits in that order: a crash in between leaves orphaned events, never
    events pointing at a calendar that still looks alive. Returns events removed.
    """
    row = _get_row(db, calendar_id)
    if row is None:
        raise NotFound("Calendar not found")
    db.delete(row)
    db.commit()

    event_ids = select(Availability.id).where(Availability.calendar_id == calendar_id)
    db.query(AvailabilityJoiner).filter(AvailabilityJoiner.availability_id.in_(event_ids)).delete(synchronize_session=False)
    removed = db.query(Availability).filter(Availability.calendar_id == calendar_id).delete(synchronize_session=False)
    db.commit()
    logger.info("Deleted calendar %s and %s availability rows", calendar_id, removed)
    return removed


def ensure_default_calendar(db: Session, calendar_id: str | None = None) -> bool:
    """Create the default calendar (DEFAULT_CALENDAR_ID unless given) if missing. Returns True when it was created."""
    calendar_id = calendar_id or settings.default_calendar_id
    created = insert_ignore(
        db,
        Calendar,
        {
            "calendar_id": calendar_id,
            "default_color": DEFAULT_CALENDAR_COLOR,
            "default_dark_mode": False,
        },
        index_elements=["calendar_id"],
    )
    db.commit()
    if created:
        logger.info("Created default calendar %s", calendar_id)
    return created
