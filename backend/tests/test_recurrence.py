"""Weekly expansion of stored availability onto the visible window."""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from joincal.services.recurrence import expand, occurrence_days, visible_window
from joincal.services.types import AvailabilityRecord


def make_record(**overrides) -> AvailabilityRecord:
    data = {
        "id": 1,
        "calendar_id": "Default",
        "date": datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc),  # a Monday
        "time_slot": "6 PM",
        "location": "Park",
        "name": "sam",
        "color": "#4a6741",
        "icon": "run",
        "recurring": True,
        "section": "evening",
        "joiners": ["alex", "kim"],
    }
    data.update(overrides)
    return AvailabilityRecord(**data)


class TestOccurrenceDays:
    def test_non_recurring_inside_window(self):
        assert occurrence_days(date(2024, 1, 3), False, date(2024, 1, 1), date(2024, 1, 7)) == [date(2024, 1, 3)]

    def test_non_recurring_outside_window(self):
        assert occurrence_days(date(2024, 1, 8), False, date(2024, 1, 1), date(2024, 1, 7)) == []

    def test_window_edges_are_inclusive(self):
        start, end = date(2024, 1, 1), date(2024, 1, 7)
        assert occurrence_days(start, False, start, end) == [start]
        assert occurrence_days(end, False, start, end) == [end]

    def test_recurring_steps_forward_to_window(self):
        assert occurrence_days(date(2024, 1, 1), True, date(2024, 3, 4), date(2024, 3, 10)) == [date(2024, 3, 4)]

    def test_recurring_never_before_anchor(self):
        assert occurrence_days(date(2024, 6, 1), True, date(2024, 1, 1), date(2024, 1, 7)) == []

    def test_anchor_years_in_the_past(self):
        anchor = date(1990, 1, 1)  # a Monday
        days = occurrence_days(anchor, True, date(2024, 3, 4), date(2024, 3, 10))
        assert days == [date(2024, 3, 4)]
        assert (days[0] - anchor).days % 7 == 0

    def test_long_window_yields_one_per_week(self):
        days = occurrence_days(date(2024, 1, 1), True, date(2024, 1, 1), date(2024, 1, 21))
        assert days == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]


class TestExpand:
    def test_later_week_gets_copy_without_joiners(self):
        record = make_record()
        result = expand([record], date(2024, 3, 4), 7)

        assert len(result) == 1
        occ = result[0]
        assert occ.occurrence_date == date(2024, 3, 4)
        assert occ.date == datetime(2024, 3, 4, 18, 0, tzinfo=timezone.utc)
        assert (occ.time_slot, occ.location, occ.icon) == (record.time_slot, record.location, record.icon)
        assert occ.joiners == []
        assert occ.is_original is False
        assert occ.id == record.id

    def test_original_occurrence_keeps_joiners(self):
        record = make_record()
        result = expand([record], date(2023, 12, 29), 7)

        assert [o.occurrence_date for o in result] == [date(2024, 1, 1)]
        assert result[0].joiners == ["alex", "kim"]
        assert result[0].is_original is True

    def test_no_look_back_before_anchor(self):
        record = make_record(date=datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc))
        assert expand([record], date(2024, 1, 1), 7) == []

    def test_future_anchor_beyond_window(self):
        record = make_record(date=datetime(2024, 1, 20, tzinfo=timezone.utc))
        assert expand([record], date(2024, 1, 1), 7) == []

    def test_non_recurring_emitted_unchanged(self):
        record = make_record(recurring=False, date=datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc))
        result = expand([record], date(2024, 1, 1), 7)

        assert len(result) == 1
        assert result[0].date == record.date
        assert result[0].joiners == record.joiners

    def test_non_recurring_outside_window_dropped(self):
        record = make_record(recurring=False, date=datetime(2024, 1, 10, tzinfo=timezone.utc))
        assert expand([record], date(2024, 1, 1), 7) == []

    def test_keys_distinguish_weekly_copies(self):
        record = make_record(id=42)
        result = expand([record], date(2024, 1, 1), 14)

        assert [o.key for o in result] == ["42-2024-01-01", "42-2024-01-08"]
        assert {o.id for o in result} == {42}
        assert result[0].joiners == ["alex", "kim"]
        assert result[1].joiners == []

    def test_window_start_datetime_is_truncated(self):
        record = make_record(recurring=False, date=datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc))
        result = expand([record], datetime(2024, 1, 1, 23, 59, tzinfo=timezone.utc), 1)
        assert len(result) == 1

    def test_output_sorted_by_day_then_time_slot(self):
        records = [
            make_record(id=1, time_slot="b", date=datetime(2024, 1, 2, tzinfo=timezone.utc), recurring=False),
            make_record(id=2, time_slot="a", date=datetime(2024, 1, 2, tzinfo=timezone.utc), recurring=False),
            make_record(id=3, time_slot="z", date=datetime(2024, 1, 1, tzinfo=timezone.utc), recurring=False),
        ]
        assert [o.id for o in expand(records, date(2024, 1, 1), 7)] == [3, 2, 1]

    def test_deterministic(self):
        records = [make_record(id=i, date=datetime(2024, 1, i, tzinfo=timezone.utc)) for i in range(1, 6)]
        first = expand(records, date(2024, 2, 1), 7)
        second = expand(records, date(2024, 2, 1), 7)
        assert first == second

    def test_source_record_not_modified(self):
        record = make_record()
        expand([record], date(2024, 3, 4), 7)
        assert record.joiners == ["alex", "kim"]
        assert record.date == datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc)

    def test_day_taken_in_calendar_timezone(self):
        # 02:00 UTC on Jan 2 is still Jan 1 in New York
        record = make_record(recurring=False, date=datetime(2024, 1, 2, 2, 0, tzinfo=timezone.utc))
        ny = ZoneInfo("America/New_York")

        assert [o.occurrence_date for o in expand([record], date(2024, 1, 1), 1, tz=ny)] == [date(2024, 1, 1)]
        assert expand([record], date(2024, 1, 1), 1) == []

    def test_naive_window_start_is_calendar_wall_clock(self):
        # Monday 18:00 in New York; local midnight Jan 8 is still Jan 7 if read as UTC
        ny = ZoneInfo("America/New_York")
        record = make_record(date=datetime(2024, 1, 1, 23, 0, tzinfo=timezone.utc))

        result = expand([record], datetime(2024, 1, 8, 0, 0), 1, tz=ny)
        assert [o.occurrence_date for o in result] == [date(2024, 1, 8)]

    def test_wall_clock_time_kept_across_dst(self):
        ny = ZoneInfo("America/New_York")
        anchor = datetime(2024, 3, 4, 18, 0, tzinfo=ny)  # before DST starts (Mar 10)
        record = make_record(date=anchor.astimezone(timezone.utc))

        result = expand([record], date(2024, 3, 11), 7, tz=ny)
        assert len(result) == 1
        assert result[0].date.astimezone(ny).hour == 18

    def test_naive_dates_are_utc(self):
        record = make_record(recurring=False, date=datetime(2024, 1, 1, 23, 0))
        assert len(expand([record], date(2024, 1, 1), 1)) == 1

    def test_accepts_orm_like_objects(self):
        class Row:
            id = 7
            calendar_id = "alpha"
            date = datetime(2024, 1, 1, tzinfo=timezone.utc)
            time_slot = "noon"
            location = "Cafe"
            name = "lee"
            color = None
            icon = None
            recurring = True
            section = "day"
            joiners = ["pat"]

        result = expand([Row()], date(2024, 1, 1), 7)
        assert result[0].calendar_id == "alpha"
        assert result[0].joiners == ["pat"]

    def test_rejects_empty_window(self):
        with pytest.raises(ValueError):
            expand([make_record()], date(2024, 1, 1), 0)

    def test_serializes_camel_case(self):
        occ = expand([make_record()], date(2024, 1, 1), 7)[0]
        payload = occ.model_dump(by_alias=True, mode="json")
        assert payload["occurrenceDate"] == "2024-01-01"
        assert payload["timeSlot"] == "6 PM"
        assert payload["key"] == "1-2024-01-01"


def test_visible_window_defaults_to_seven_days():
    first, last = visible_window(date(2024, 1, 1))
    assert first == date(2024, 1, 1)
    assert last - first == timedelta(days=6)


def test_visible_window_custom_length():
    first, last = visible_window(date(2024, 1, 1), 14)
    assert last == date(2024, 1, 14)
