"""
Availability: one "I'll be here" slot posted on a calendar.

date: anchor instant. For recurring rows it is the first occurrence and fixes the weekly phase.
joiners: one AvailabilityJoiner row per participant; (availability_id, name) is unique so
join/unjoin can be single INSERT ... ON CONFLICT DO NOTHING / DELETE statements.
"""
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from joincal.config import settings
from joincal.core.constants import SECTION_DAY
from joincal.db.base import Base


class Availability(Base):
    __tablename__ = "availabilities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    calendar_id = Column(String(20), nullable=False, default=lambda: settings.default_calendar_id, index=True)
    date = Column(DateTime(timezone=True), nullable=False)
    time_slot = Column(String(100), nullable=False)
    location = Column(String(200), nullable=False)
    name = Column(String(50), nullable=False)  # creator; only they may edit (enforced client-side)
    color = Column(String(7), nullable=True)
    icon = Column(String(50), nullable=True)
    recurring = Column(Boolean, nullable=False, default=False, server_default="false")
    section = Column(String(16), nullable=False, default=SECTION_DAY, server_default=SECTION_DAY)  # 'day' | 'evening'
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (CheckConstraint("section IN ('day', 'evening')", name="ck_availabilities_section"),)

    joiner_rows = relationship(
        "AvailabilityJoiner",
        order_by="AvailabilityJoiner.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def joiners(self) -> list[str]:
        return [j.name for j in self.joiner_rows]


class AvailabilityJoiner(Base):
    __tablename__ = "availability_joiners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    availability_id = Column(
        Integer,
        ForeignKey("availabilities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("availability_id", "name", name="uq_availability_joiners_availability_name"),)
