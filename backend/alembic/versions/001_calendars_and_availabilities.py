"""Calendars, availabilities and availability_joiners.

availabilities.calendar_id is the namespace partition key (indexed, no FK: deleting a
calendar removes its rows explicitly). availability_joiners holds the joiners set with a
unique (availability_id, name) pair so join/unjoin are single-statement set operations.
Seeds the DEFAULT_CALENDAR_ID calendar.

Revision ID: 001
Revises:
Create Date: (run alembic upgrade head)

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from joincal.config import settings

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "calendars",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("calendar_id", sa.String(20), nullable=False),
        sa.Column("default_color", sa.String(7), nullable=False, server_default="#66BB6A"),
        sa.Column("default_dark_mode", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_calendars_calendar_id", "calendars", ["calendar_id"], unique=True)

    op.create_table(
        "availabilities",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("calendar_id", sa.String(20), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("time_slot", sa.String(100), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("color", sa.String(7), nullable=True),
        sa.Column("icon", sa.String(50), nullable=True),
        sa.Column("recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("section", sa.String(16), nullable=False, server_default="day"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("section IN ('day', 'evening')", name="ck_availabilities_section"),
    )
    op.create_index("ix_availabilities_calendar_id", "availabilities", ["calendar_id"], unique=False)

    op.create_table(
        "availability_joiners",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "availability_id",
            sa.Integer(),
            sa.ForeignKey("availabilities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("availability_id", "name", name="uq_availability_joiners_availability_name"),
    )
    op.create_index(
        "ix_availability_joiners_availability_id",
        "availability_joiners",
        ["availability_id"],
        unique=False,
    )

    op.execute(
        sa.text("INSERT INTO calendars (calendar_id) VALUES (:calendar_id)").bindparams(
            calendar_id=settings.default_calendar_id
        )
    )


def downgrade() -> None:
    op.drop_index("ix_availability_joiners_availability_id", table_name="availability_joiners")
    op.drop_table("availability_joiners")
    op.drop_index("ix_availabilities_calendar_id", table_name="availabilities")
    op.drop_table("availabilities")
    op.drop_index("ix_calendars_calendar_id", table_name="calendars")
    op.drop_table("calendars")
