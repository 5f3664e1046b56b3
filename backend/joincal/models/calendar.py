"""Calendar namespace: every availability row belongs to exactly one calendar_id."""
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from joincal.core.constants import DEFAULT_CALENDAR_COLOR
from joincal.db.base import Base


class Calendar(Base):
    __tablename__ = "calendars"

    id = Column(Integer, primary_key=True, autoincrement=True)
    calendar_id = Column(String(20), nullable=False, unique=True, index=True)
    # Presentation defaults copied into a client's first-run preferences
    default_color = Column(String(7), nullable=False, default=DEFAULT_CALENDAR_COLOR, server_default=DEFAULT_CALENDAR_COLOR)
    default_dark_mode = Column(Boolean, nullable=False, default=False, server_default="false")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
