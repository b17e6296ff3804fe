"""
Shared fixtures for the timetable backend tests.
"""

from datetime import date

import pytest

from backend import debug, time_utils
from backend.schedule import ScheduleRecord


# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)


def make_schedule(**overrides) -> ScheduleRecord:
    """Build a valid schedule record, overriding any field."""
    values = {
        "id": "sched-1",
        "course_code": "CS101",
        "course_name": "Intro to Programming",
        "day": "Monday",
        "start_time": "09:00",
        "end_time": "10:30",
        "location": "Room 101",
    }
    values.update(overrides)
    return ScheduleRecord(**values)


@pytest.fixture(autouse=True)
def reset_module_state():
    """Keep the debug flag and the configured timezone from leaking between tests."""
    debug.set_debug_enabled(False)
    time_utils.set_timezone(None)
    yield
    debug.set_debug_enabled(False)
    time_utils.set_timezone(None)


@pytest.fixture
def schedule_fields() -> dict:
    """Editable fields of a valid schedule, as the dialog would submit them."""
    return {
        "course_code": "MA201",
        "course_name": "Linear Algebra",
        "day": "Tuesday",
        "start_time": "13:00",
        "end_time": "14:30",
        "location": "Hall B",
        "lecturer": "Dr. Ahmad",
    }
