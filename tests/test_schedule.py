"""
Unit tests for schedule records and field validation.
"""

import pytest

from backend.errors import ScheduleValidationError
from backend.schedule import EDITABLE_FIELDS, ScheduleRecord, validate_schedule_fields
from tests.conftest import make_schedule


class TestScheduleRecord:
    """Test ScheduleRecord properties and conversions."""

    def test_derived_properties(self):
        schedule = make_schedule(day="wed", start_time="08:00", end_time="09:30")
        assert schedule.day_index == 3
        assert schedule.day_name == "Wednesday"
        assert schedule.title == "CS101 Intro to Programming"
        assert schedule.duration_minutes == 90

    def test_to_dict_uses_stored_keys(self):
        data = make_schedule(lecturer="Dr. Lim").to_dict()
        assert data == {
            "id": "sched-1",
            "courseCode": "CS101",
            "courseName": "Intro to Programming",
            "day": "Monday",
            "startTime": "09:00",
            "endTime": "10:30",
            "location": "Room 101",
            "lecturer": "Dr. Lim",
        }

    def test_optional_fields_omitted_when_unset(self):
        data = make_schedule().to_dict()
        assert "lecturer" not in data
        assert "week" not in data

    def test_from_dict_accepts_both_key_styles(self):
        camel = ScheduleRecord.from_dict({
            "id": "x", "courseCode": "PH110", "courseName": "Physics", "day": "Thursday",
            "startTime": "11:00", "endTime": "12:00", "location": "Lab 2", "week": "1-14",
        })
        snake = ScheduleRecord.from_dict({
            "id": "x", "course_code": "PH110", "course_name": "Physics", "day": "Thursday",
            "start_time": "11:00", "end_time": "12:00", "location": "Lab 2", "week": "1-14",
        })
        assert camel == snake
        assert camel.week == "1-14"
        assert camel.lecturer is None

    def test_from_dict_missing_fields(self):
        with pytest.raises(KeyError, match="startTime|start_time"):
            ScheduleRecord.from_dict({"id": "x", "courseCode": "A", "courseName": "B",
                                      "day": "Monday", "endTime": "10:00", "location": "C"})

    def test_with_changes_returns_copy(self):
        schedule = make_schedule()
        moved = schedule.with_changes({"day": "Friday"})
        assert moved.day == "Friday"
        assert schedule.day == "Monday"
        assert moved.id == schedule.id

    def test_with_changes_keeps_id(self):
        schedule = make_schedule()
        assert schedule.with_changes({"id": "sched-1", "week": "W1"}).id == "sched-1"
        with pytest.raises(ValueError, match="immutable"):
            schedule.with_changes({"id": "other"})

    def test_editable_fields(self):
        assert set(make_schedule().editable_fields()) == set(EDITABLE_FIELDS)
        assert "id" not in EDITABLE_FIELDS


class TestValidateScheduleFields:
    """Test validate_schedule_fields()."""

    def test_valid(self, schedule_fields):
        validate_schedule_fields(schedule_fields)

    def test_single_digit_hour_accepted(self, schedule_fields):
        validate_schedule_fields(dict(schedule_fields, start_time="9:00", end_time="10:00"))

    def test_reports_every_failing_field(self):
        with pytest.raises(ScheduleValidationError) as exc_info:
            validate_schedule_fields({"course_code": " ", "day": "", "start_time": "25:00",
                                      "end_time": "10:00"})
        errors = exc_info.value.errors
        assert set(errors) == {"course_code", "course_name", "location", "day", "start_time"}
        assert errors["start_time"] == "Invalid time format (HH:MM)"

    def test_unrecognised_day_rejected(self, schedule_fields):
        with pytest.raises(ScheduleValidationError) as exc_info:
            validate_schedule_fields(dict(schedule_fields, day="Funday"))
        assert "day" in exc_info.value.errors

    @pytest.mark.parametrize("end", ["13:00", "12:59"])
    def test_end_must_follow_start(self, schedule_fields, end):
        with pytest.raises(ScheduleValidationError) as exc_info:
            validate_schedule_fields(dict(schedule_fields, end_time=end))
        assert exc_info.value.errors == {"end_time": "must be after start time"}

    def test_optional_fields_must_be_text(self, schedule_fields):
        with pytest.raises(ScheduleValidationError) as exc_info:
            validate_schedule_fields(dict(schedule_fields, week=3))
        assert "week" in exc_info.value.errors

    def test_message_lists_fields(self, schedule_fields):
        with pytest.raises(ScheduleValidationError, match="location: is required"):
            validate_schedule_fields(dict(schedule_fields, location=""))
