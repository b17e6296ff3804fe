"""
Weekday normalisation.

Schedule records carry a free-form day descriptor ("Monday", "mon", "1", 1).
Everything here works in the Sunday-based index space (Sunday=0 ... Saturday=6).
The calendar grids use a Monday-first layout instead; that conversion lives in
date_grid.monday_based_weekday() and the two must not be mixed.
"""

from datetime import date
from typing import Optional, Union

from .debug import debug_print
from .errors import InvalidWeekdayError


DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Index returned for descriptors that cannot be recognised
FALLBACK_DAY_INDEX = 0

DayDescriptor = Union[str, int]


def parse_day(day: DayDescriptor) -> Optional[int]:
    """
    Parse a day descriptor into a Sunday-based index.

    Accepts an integer 0-6, a case-insensitive prefix of a full English day
    name (first match in Sunday-first order), or a numeric string 0-6.

    Returns:
        The index, or None if the descriptor is not recognised.
    """
    if isinstance(day, bool):
        return None
    if isinstance(day, int):
        return day if 0 <= day <= 6 else None
    if not isinstance(day, str):
        return None

    text = day.strip().lower()
    if not text:
        return None

    for index, name in enumerate(DAY_NAMES):
        if name.lower().startswith(text):
            return index

    try:
        number = int(text)
    except ValueError:
        return None
    return number if 0 <= number <= 6 else None


def day_name_to_index(day: DayDescriptor) -> int:
    """
    Map a day descriptor to 0-6 (Sunday=0).

    Unrecognised descriptors fall back to Sunday. This is a silent default,
    not an error; use parse_day() to detect it.
    """
    index = parse_day(day)
    if index is None:
        debug_print("WEEKDAY", f"Unrecognised day {day!r}, using {DAY_NAMES[FALLBACK_DAY_INDEX]}")
        return FALLBACK_DAY_INDEX
    return index


def index_to_day_name(index: int) -> str:
    """
    Full English day name for a Sunday-based index.

    Raises:
        InvalidWeekdayError: if index is not an integer in 0-6.
    """
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 6:
        raise InvalidWeekdayError(f"Weekday index out of range: {index!r}")
    return DAY_NAMES[index]


def normalize_day_name(day: DayDescriptor) -> str:
    """Canonical day name for a recognised descriptor, else the descriptor as a string."""
    index = parse_day(day)
    if index is None:
        return str(day)
    return DAY_NAMES[index]


def sunday_based_weekday(d: date) -> int:
    """Weekday of a calendar date with Sunday=0 ... Saturday=6."""
    # date.weekday() is Monday=0 ... Sunday=6
    return (d.weekday() + 1) % 7
