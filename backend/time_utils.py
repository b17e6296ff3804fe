"""
Time-of-day utilities for Class Timetable.

Schedules store their times as naive 24-hour "HH:MM" wall-clock strings.
This module converts between those strings and minutes since midnight, and
provides the local clock used for "today" and the current-time indicator.
"""

import re
import time as _time
from datetime import datetime, date
from typing import Optional

import pytz

from .errors import MalformedTimeError, InvalidDurationError


MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

# None means "whatever the system clock says"
_local_timezone_name: Optional[str] = None


def time_to_minutes(time: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    Raises:
        MalformedTimeError: if the value is not two colon-separated integers
            with hours in 0-23 and minutes in 0-59.
    """
    if not isinstance(time, str):
        raise MalformedTimeError(f"Invalid time format (HH:MM): {time!r}")
    match = _TIME_RE.match(time)
    if match is None:
        raise MalformedTimeError(f"Invalid time format (HH:MM): {time!r}")
    hours = int(match.group(1))
    minutes = int(match.group(2))
    if not 0 <= hours <= 23 or not 0 <= minutes <= 59:
        raise MalformedTimeError(f"Time out of range: {time!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """
    Convert minutes since midnight to a zero-padded "HH:MM" string.

    Raises:
        InvalidDurationError: for negative values or values past 23:59.
    """
    if minutes < 0:
        raise InvalidDurationError(f"Negative minutes: {minutes}")
    if minutes >= MINUTES_PER_DAY:
        raise InvalidDurationError(f"Minutes exceed one day: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(time: str, delta: int) -> str:
    """Shift an "HH:MM" time by delta minutes, clamped to 00:00-23:59."""
    total = time_to_minutes(time) + delta
    total = max(0, min(MINUTES_PER_DAY - 1, total))
    return minutes_to_time(total)


def format_time(time: str) -> str:
    """Format "HH:MM" for display in 12-hour form, e.g. "9:00 AM"."""
    total = time_to_minutes(time)
    hours, minutes = divmod(total, 60)
    suffix = "AM" if hours < 12 else "PM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes:02d} {suffix}"


# ==================== Local clock ====================

def set_timezone(timezone_name: Optional[str]):
    """Set the zone that defines "now" for the application (None = system)."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.

    Uses the configured zone name if set, otherwise the system zone, and as a
    last resort a fixed offset computed from the C library.
    """
    if _local_timezone_name:
        try:
            return pytz.timezone(_local_timezone_name)
        except pytz.UnknownTimeZoneError:
            pass
    try:
        return pytz.timezone(_time.tzname[0])
    except pytz.UnknownTimeZoneError:
        is_dst = _time.localtime().tm_isdst
        if is_dst:
            offset_seconds = -_time.altzone
        else:
            offset_seconds = -_time.timezone
        return pytz.FixedOffset(offset_seconds // 60)


def local_now() -> datetime:
    """Current local wall-clock time as a naive datetime."""
    if not _local_timezone_name:
        return datetime.now()
    local_dt = datetime.now(pytz.UTC).astimezone(get_local_timezone())
    return local_dt.replace(tzinfo=None)


def local_today() -> date:
    return local_now().date()


def now_minutes(now: Optional[datetime] = None) -> int:
    """Minutes since midnight of the given (or current local) time."""
    if now is None:
        now = local_now()
    return now.hour * 60 + now.minute
