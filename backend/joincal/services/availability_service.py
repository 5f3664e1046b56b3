"""
Availability store: calendar-scoped list/get/create/update/delete.

Every call takes an explicit calendar_id and only sees rows with that id; a row in
another calendar is reported as NotFound. Inputs are plain dicts with snake_case keys
(routes dump their request bodies); unknown keys are dropped, never stored.
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from joincal.config import settings
from joincal.core.constants import (
    AVAILABILITY_CREATE_FIELDS,
    AVAILABILITY_REQUIRED_FIELDS,
    AVAILABILITY_UPDATE_FIELDS,
    ICON_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    SECTION_DAY,
    TIME_SLOT_MAX_LENGTH,
)
from joincal.core.dates import calendar_zone, parse_instant
from joincal.core.errors import NotFound, ValidationError
from joincal.core.validation import (
    optional_text,
    require_text,
    validate_bool,
    validate_calendar_id,
    validate_color,
    validate_section,
    wire_name,
)
from joincal.models.availability import Availability
from joincal.services.types import AvailabilityRecord

logger = logging.getLogger(__name__)

MSG_EVENT_NOT_FOUND = "Event not found"


def _pick(data: dict[str, Any], allowed: tuple[str, ...]) -> dict[str, Any]:
    return {k: data[k] for k in allowed if data.get(k) is not None}


def _clean_field(field: str, value: Any) -> Any:
    """Validate one allow-listed field; returns the value to store."""
    if field == "time_slot":
        return require_text(field, value, TIME_SLOT_MAX_LENGTH)
    if field == "location":
        return require_text(field, value, LOCATION_MAX_LENGTH)
    if field == "name":
        return require_text(field, value, NAME_MAX_LENGTH)
    if field == "icon":
        return optional_text(field, value, ICON_MAX_LENGTH)
    if field == "color":
        return validate_color(value)
    if field == "recurring":
        return validate_bool(field, value)
    if field == "section":
        return validate_section(value)
    if field == "date":
        return parse_instant(value, calendar_zone(settings.calendar_timezone))
    if field == "calendar_id":
        return validate_calendar_id(value)
    raise ValidationError(f"{field} cannot be set")


def get_row(db: Session, calendar_id: str, event_id: int) -> Availability:
    """The stored row for event_id inside calendar_id, or NotFound."""
    row = (
        db.query(Availability)
        .filter(Availability.id == event_id, Availability.calendar_id == calendar_id)
        .first()
    )
    if row is None:
        raise NotFound(MSG_EVENT_NOT_FOUND)
    return row


def list_availabilities(db: Session, calendar_id: str) -> list[AvailabilityRecord]:
    """All stored records of one calendar, oldest anchor first. Expansion is the caller's job."""
    rows = (
        db.query(Availability)
        .filter(Availability.calendar_id == calendar_id)
        .order_by(Availability.date.asc(), Availability.time_slot.asc(), Availability.id.asc())
        .all()
    )
    return [AvailabilityRecord.model_validate(r) for r in rows]


def get_availability(db: Session, calendar_id: str, event_id: int) -> AvailabilityRecord:
    return AvailabilityRecord.model_validate(get_row(db, calendar_id, event_id))


def create_availability(db: Session, data: dict[str, Any], calendar_id: str | None = None) -> AvailabilityRecord:
    """
    Store a new availability. calendar_id (argument, else data["calendar_id"]) defaults to
    DEFAULT_CALENDAR_ID. time_slot, location, name and date are required; joiners always start empty.
    """
    fields = _pick(data, AVAILABILITY_CREATE_FIELDS)
    fields["calendar_id"] = calendar_id or fields.get("calendar_id") or settings.default_calendar_id
    for required in AVAILABILITY_REQUIRED_FIELDS:
        value = fields.get(required)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{wire_name(required)} is required")
    cleaned = {k: _clean_field(k, v) for k, v in fields.items()}
    cleaned.setdefault("recurring", False)
    cleaned.setdefault("section", SECTION_DAY)

    row = Availability(**cleaned)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(
        "Created availability id=%s calendar=%s recurring=%s by %s",
        row.id, row.calendar_id, row.recurring, row.name,
    )
    return AvailabilityRecord.model_validate(row)


def update_availability(
    db: Session,
    calendar_id: str,
    event_id: int,
    changes: dict[str, Any],
) -> AvailabilityRecord:
    """
    Apply changes restricted to time_slot, location, icon, recurring, section.
    name, color, date and joiners are silently ignored so an edit cannot reassign
    ownership or move the anchor. Validation happens before any write.
    """
    allowed = {k: changes[k] for k in AVAILABILITY_UPDATE_FIELDS if k in changes}
    # icon may be cleared; the rest must stay set
    cleaned = {
        k: _clean_field(k, v)
        for k, v in allowed.items()
        if v is not None or k == "icon"
    }
    row = get_row(db, calendar_id, event_id)
    for k, v in cleaned.items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    logger.info("Updated availability id=%s fields=%s", event_id, sorted(cleaned))
    return AvailabilityRecord.model_validate(row)


def delete_availability(db: Session, calendar_id: str, event_id: int) -> None:
    """Delete one record and its joiners. No ownership check (anyone on the calendar may delete)."""
    row = get_row(db, calendar_id, event_id)
    db.delete(row)
    db.commit()
    logger.info("Deleted availability id=%s calendar=%s", event_id, calendar_id)
