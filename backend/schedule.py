"""
Schedule records: a class that recurs on one weekday every week.

ScheduleRecord is the in-memory representation handed to the engine. On disk
records are dicts with camelCase keys; see to_dict() / from_dict().
"""

import re
from dataclasses import dataclass, fields, replace
from typing import Any, Optional, Union

from .errors import ScheduleValidationError, MalformedTimeError
from .time_utils import time_to_minutes
from .weekdays import parse_day, day_name_to_index, normalize_day_name


# HH:MM with one or two hour digits
TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")

REQUIRED_TEXT_FIELDS = ("course_code", "course_name", "location")

# snake_case attribute -> stored camelCase key
_KEY_MAP = {
    "id": "id",
    "course_code": "courseCode",
    "course_name": "courseName",
    "day": "day",
    "start_time": "startTime",
    "end_time": "endTime",
    "location": "location",
    "lecturer": "lecturer",
    "week": "week",
}

EDITABLE_FIELDS = tuple(k for k in _KEY_MAP if k != "id")


@dataclass
class ScheduleRecord:
    """A weekly recurring class occurrence."""
    id: str
    course_code: str
    course_name: str
    day: Union[str, int]  # stored as given, normalised on read
    start_time: str       # "HH:MM"
    end_time: str         # "HH:MM"
    location: str
    lecturer: Optional[str] = None
    week: Optional[str] = None  # free-form label, not used for matching

    @property
    def day_index(self) -> int:
        """Sunday-based weekday index (unrecognised days read as Sunday)."""
        return day_name_to_index(self.day)

    @property
    def day_name(self) -> str:
        return normalize_day_name(self.day)

    @property
    def title(self) -> str:
        return f"{self.course_code} {self.course_name}"

    @property
    def duration_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)

    def with_changes(self, changes: dict[str, Any]) -> 'ScheduleRecord':
        """Return a copy with the given fields replaced. The id cannot be changed."""
        if changes.get("id", self.id) != self.id:
            raise ValueError("Schedule id is immutable")
        return replace(self, **changes)

    def editable_fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}

    def to_dict(self) -> dict:
        data = {}
        for attr, key in _KEY_MAP.items():
            value = getattr(self, attr)
            if value is None and attr in ("lecturer", "week"):
                continue
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'ScheduleRecord':
        kwargs = {}
        for attr, key in _KEY_MAP.items():
            if key in data:
                kwargs[attr] = data[key]
            elif attr in data:
                kwargs[attr] = data[attr]
        missing = [f.name for f in fields(cls) if f.name not in kwargs
                   and f.name not in ("lecturer", "week")]
        if missing:
            raise KeyError(f"Schedule record missing fields: {', '.join(missing)}")
        return cls(**kwargs)


def validate_schedule_fields(values: dict[str, Any]) -> None:
    """
    Check the editable fields of a schedule.

    Required text fields must be non-empty, the day must be recognisable,
    both times must be HH:MM and the class must end after it starts.

    Raises:
        ScheduleValidationError: listing every failing field.
    """
    errors: dict[str, str] = {}

    for name in REQUIRED_TEXT_FIELDS:
        value = values.get(name)
        if not isinstance(value, str) or not value.strip():
            errors[name] = "is required"

    day = values.get("day")
    if day is None or (isinstance(day, str) and not day.strip()):
        errors["day"] = "is required"
    elif parse_day(day) is None:
        errors["day"] = f"unrecognised day {day!r}"

    for name in ("start_time", "end_time"):
        value = values.get(name)
        if not isinstance(value, str) or not TIME_PATTERN.match(value):
            errors[name] = "Invalid time format (HH:MM)"

    if "start_time" not in errors and "end_time" not in errors:
        try:
            if time_to_minutes(values["end_time"]) <= time_to_minutes(values["start_time"]):
                errors["end_time"] = "must be after start time"
        except MalformedTimeError as e:
            errors["end_time"] = str(e)

    for name in ("lecturer", "week"):
        value = values.get(name)
        if value is not None and not isinstance(value, str):
            errors[name] = "must be text"

    if errors:
        raise ScheduleValidationError(errors)
