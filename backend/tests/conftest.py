import os

# Point the app's module-level engine at SQLite before anything imports joincal.config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["CALENDAR_TIMEZONE"] = "UTC"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from joincal.db.base import Base
from joincal.db.session import get_db
from joincal.main import app
from joincal.core.context import CalendarContext
from joincal.models import Availability, AvailabilityJoiner, Calendar  # noqa: F401  (register tables)


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(
        f"sqlite:///{tmp_path / 'joincal-test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def default_ctx():
    return CalendarContext()


@pytest.fixture
def sample_event_data():
    return {
        "date": datetime(2024, 1, 1, 18, 30, tzinfo=timezone.utc),
        "time_slot": "6:30 PM",
        "location": "Climbing gym",
        "name": "sam",
        "color": "#4a6741",
        "icon": "climbing",
        "recurring": False,
        "section": "evening",
    }
