"""
Error types raised by the timetable engine.

All of them signal bad input data (usually a malformed schedule record) and
are raised at the point where the bad value is read. Nothing is retried.
"""

from typing import Optional


class TimetableError(ValueError):
    """Base class for timetable data errors."""


class MalformedTimeError(TimetableError):
    """A time string is not a valid 24-hour HH:MM value."""


class InvalidDurationError(TimetableError):
    """A time span is empty or negative, or minutes fall outside a day."""


class InvalidWeekdayError(TimetableError):
    """A weekday index is outside 0-6."""


class ScheduleValidationError(TimetableError):
    """
    A schedule record failed field validation.

    `errors` maps each offending field name to a human readable message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(summary or "invalid schedule")


class ScheduleNotFoundError(TimetableError, LookupError):
    """No schedule with the given identifier exists in the store."""

    def __init__(self, schedule_id: str, message: Optional[str] = None):
        self.schedule_id = schedule_id
        super().__init__(message or f"Schedule not found: {schedule_id}")
