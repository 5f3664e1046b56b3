"""Calendar-scoped availability store."""
from datetime import datetime, timezone

import pytest

from joincal.core.errors import NotFound, ValidationError
from joincal.services import availability_service


class TestCreate:
    def test_defaults(self, db, sample_event_data):
        data = dict(sample_event_data)
        data.pop("recurring")
        data.pop("section")
        record = availability_service.create_availability(db, data)

        assert record.calendar_id == "Default"
        assert record.recurring is False
        assert record.section == "day"
        assert record.joiners == []
        assert record.date == datetime(2024, 1, 1, 18, 30, tzinfo=timezone.utc)

    def test_calendar_argument_wins(self, db, sample_event_data):
        data = dict(sample_event_data, calendar_id="beta")
        assert availability_service.create_availability(db, data, calendar_id="alpha").calendar_id == "alpha"

    def test_calendar_from_data(self, db, sample_event_data):
        data = dict(sample_event_data, calendar_id="beta")
        assert availability_service.create_availability(db, data).calendar_id == "beta"

    @pytest.mark.parametrize("field,message", [
        ("time_slot", "timeSlot is required"),
        ("location", "location is required"),
        ("name", "name is required"),
        ("date", "date is required"),
    ])
    def test_required_fields(self, db, sample_event_data, field, message):
        data = dict(sample_event_data, **{field: ""})
        with pytest.raises(ValidationError, match=message):
            availability_service.create_availability(db, data)
        assert availability_service.list_availabilities(db, "Default") == []

    def test_rejects_bad_color(self, db, sample_event_data):
        with pytest.raises(ValidationError, match="hex color"):
            availability_service.create_availability(db, dict(sample_event_data, color="red"))

    def test_rejects_bad_section(self, db, sample_event_data):
        with pytest.raises(ValidationError, match="section"):
            availability_service.create_availability(db, dict(sample_event_data, section="night"))

    def test_rejects_long_location(self, db, sample_event_data):
        with pytest.raises(ValidationError, match="at most 200"):
            availability_service.create_availability(db, dict(sample_event_data, location="x" * 201))

    def test_rejects_bad_calendar_id(self, db, sample_event_data):
        with pytest.raises(ValidationError, match="Calendar ID"):
            availability_service.create_availability(db, dict(sample_event_data, calendar_id="has space"))

    def test_ignores_joiners_and_unknown_fields(self, db, sample_event_data):
        data = dict(sample_event_data, joiners=["mallory"], owner="eve")
        assert availability_service.create_availability(db, data).joiners == []

    def test_date_string_is_calendar_wall_clock(self, db, sample_event_data):
        record = availability_service.create_availability(db, dict(sample_event_data, date="2024-01-05"))
        assert record.date == datetime(2024, 1, 5, tzinfo=timezone.utc)

    def test_date_string_with_offset(self, db, sample_event_data):
        record = availability_service.create_availability(
            db, dict(sample_event_data, date="2024-01-05T10:00:00-05:00")
        )
        assert record.date == datetime(2024, 1, 5, 15, 0, tzinfo=timezone.utc)

    def test_rejects_unparseable_date(self, db, sample_event_data):
        with pytest.raises(ValidationError, match="ISO 8601"):
            availability_service.create_availability(db, dict(sample_event_data, date="next tuesday"))


class TestIsolation:
    def test_list_only_returns_own_calendar(self, db, sample_event_data):
        a = availability_service.create_availability(db, dict(sample_event_data, location="A"), calendar_id="alpha")
        b = availability_service.create_availability(db, dict(sample_event_data, location="B"), calendar_id="beta")

        assert [r.id for r in availability_service.list_availabilities(db, "alpha")] == [a.id]
        assert [r.id for r in availability_service.list_availabilities(db, "beta")] == [b.id]
        assert availability_service.list_availabilities(db, "Default") == []

    def test_get_from_other_calendar_is_not_found(self, db, sample_event_data):
        a = availability_service.create_availability(db, sample_event_data, calendar_id="alpha")
        with pytest.raises(NotFound):
            availability_service.get_availability(db, "beta", a.id)

    def test_update_and_delete_scoped(self, db, sample_event_data):
        a = availability_service.create_availability(db, sample_event_data, calendar_id="alpha")
        with pytest.raises(NotFound):
            availability_service.update_availability(db, "beta", a.id, {"location": "elsewhere"})
        with pytest.raises(NotFound):
            availability_service.delete_availability(db, "beta", a.id)
        assert availability_service.get_availability(db, "alpha", a.id).location == "Climbing gym"

    def test_list_ordered_by_anchor(self, db, sample_event_data):
        later = availability_service.create_availability(
            db, dict(sample_event_data, date=datetime(2024, 2, 1, tzinfo=timezone.utc))
        )
        earlier = availability_service.create_availability(
            db, dict(sample_event_data, date=datetime(2024, 1, 1, tzinfo=timezone.utc))
        )
        assert [r.id for r in availability_service.list_availabilities(db, "Default")] == [earlier.id, later.id]


class TestUpdate:
    def test_updates_allowed_fields(self, db, sample_event_data):
        record = availability_service.create_availability(db, sample_event_data)
        updated = availability_service.update_availability(
            db,
            "Default",
            record.id,
            {"time_slot": "7 PM", "location": "Roof", "icon": "sun", "recurring": True, "section": "day"},
        )
        assert (updated.time_slot, updated.location, updated.icon, updated.recurring, updated.section) == (
            "7 PM", "Roof", "sun", True, "day",
        )

    def test_ignores_protected_fields(self, db, sample_event_data):
        record = availability_service.create_availability(db, sample_event_data)
        updated = availability_service.update_availability(
            db,
            "Default",
            record.id,
            {
                "name": "mallory",
                "color": "#000000",
                "date": datetime(2020, 1, 1, tzinfo=timezone.utc),
                "joiners": ["mallory"],
                "location": "Library",
            },
        )
        assert updated.name == "sam"
        assert updated.color == "#4a6741"
        assert updated.date == record.date
        assert updated.joiners == []
        assert updated.location == "Library"

    def test_icon_can_be_cleared(self, db, sample_event_data):
        record = availability_service.create_availability(db, sample_event_data)
        assert availability_service.update_availability(db, "Default", record.id, {"icon": None}).icon is None

    def test_invalid_update_leaves_row_untouched(self, db, sample_event_data):
        record = availability_service.create_availability(db, sample_event_data)
        with pytest.raises(ValidationError):
            availability_service.update_availability(db, "Default", record.id, {"location": "Roof", "time_slot": ""})
        assert availability_service.get_availability(db, "Default", record.id).location == "Climbing gym"

    def test_unknown_event(self, db):
        with pytest.raises(NotFound):
            availability_service.update_availability(db, "Default", 12345, {"location": "Roof"})


class TestDelete:
    def test_delete_removes_row(self, db, sample_event_data):
        record = availability_service.create_availability(db, sample_event_data)
        availability_service.delete_availability(db, "Default", record.id)
        with pytest.raises(NotFound):
            availability_service.get_availability(db, "Default", record.id)

    def test_delete_unknown_event(self, db):
        with pytest.raises(NotFound):
            availability_service.delete_availability(db, "Default", 12345)
