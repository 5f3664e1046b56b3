"""
Join/unjoin: add or remove a participant name on one availability's joiners set.

The set lives in availability_joiners with a unique (availability_id, name) pair, so each
change is a single statement: INSERT ... ON CONFLICT DO NOTHING to join, DELETE to unjoin.
The joiners list is never read, edited in memory and written back; two people joining the
same event at the same moment both end up in the set.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from joincal.core.constants import NAME_MAX_LENGTH
from joincal.core.context import CalendarContext
from joincal.core.errors import NotFound, ValidationError
from joincal.core.validation import require_text
from joincal.db.dialect import insert_ignore
from joincal.models.availability import AvailabilityJoiner
from joincal.services.availability_service import MSG_EVENT_NOT_FOUND, get_row
from joincal.services.types import AvailabilityRecord

logger = logging.getLogger(__name__)


def _participant(ctx: CalendarContext, participant_name: str | None) -> str:
    name = participant_name if participant_name is not None else ctx.participant_name
    if name is None or (isinstance(name, str) and not name.strip()):
        raise ValidationError("Name is required")
    return require_text("name", name, NAME_MAX_LENGTH)


def _refreshed(db: Session, ctx: CalendarContext, event_id: int) -> AvailabilityRecord:
    # Drop whatever this session cached so the returned joiners reflect committed state.
    db.expire_all()
    return AvailabilityRecord.model_validate(get_row(db, ctx.calendar_id, event_id))


def join(db: Session, ctx: CalendarContext, event_id: int, participant_name: str | None = None) -> AvailabilityRecord:
    """Add participant to the event's joiners. Joining twice is a no-op, not an error."""
    name = _participant(ctx, participant_name)
    get_row(db, ctx.calendar_id, event_id)
    try:
        added = insert_ignore(
            db,
            AvailabilityJoiner,
            {"availability_id": event_id, "name": name},
            index_elements=["availability_id", "name"],
        )
        db.commit()
    except IntegrityError as e:
        # Event deleted between the existence check and the insert (foreign key)
        db.rollback()
        raise NotFound(MSG_EVENT_NOT_FOUND) from e
    if added:
        logger.info("%s joined availability id=%s", name, event_id)
    else:
        logger.debug("%s already joined availability id=%s", name, event_id)
    return _refreshed(db, ctx, event_id)


def unjoin(db: Session, ctx: CalendarContext, event_id: int, participant_name: str | None = None) -> AvailabilityRecord:
    """Remove participant from the event's joiners. Absent names are a no-op."""
    name = _participant(ctx, participant_name)
    get_row(db, ctx.calendar_id, event_id)
    removed = (
        db.query(AvailabilityJoiner)
        .filter(AvailabilityJoiner.availability_id == event_id, AvailabilityJoiner.name == name)
        .delete(synchronize_session=False)
    )
    db.commit()
    if removed:
        logger.info("%s left availability id=%s", name, event_id)
    else:
        logger.debug("%s was not on availability id=%s", name, event_id)
    return _refreshed(db, ctx, event_id)


def is_member(db: Session, event_id: int, participant_name: str) -> bool:
    return (
        db.query(AvailabilityJoiner.id)
        .filter(AvailabilityJoiner.availability_id == event_id, AvailabilityJoiner.name == participant_name)
        .first()
        is not None
    )


def toggle_membership(
    db: Session,
    ctx: CalendarContext,
    event_id: int,
    participant_name: str | None = None,
) -> AvailabilityRecord:
    """
    Join when the participant is absent, unjoin otherwise.
    Rapid conflicting toggles by the same participant resolve last-write-wins; other
    participants' memberships are never touched.
    """
    name = _participant(ctx, participant_name)
    get_row(db, ctx.calendar_id, event_id)
    if is_member(db, event_id, name):
        return unjoin(db, ctx, event_id, name)
    return join(db, ctx, event_id, name)
