"""
Date grids for the day, week, month and year views.

Grids are Monday-first. Weekday positions in a grid use Python's Monday=0
convention (monday_based_weekday); the weekday normaliser's Sunday=0 indices
never appear here.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .time_utils import local_today


MONTH_GRID_ROWS = 6
DAYS_PER_WEEK = 7
MONTH_GRID_CELLS = MONTH_GRID_ROWS * DAYS_PER_WEEK


@dataclass(frozen=True)
class CalendarDateCell:
    """One date slot of a month grid."""
    date: date
    is_current_period: bool


def monday_based_weekday(d: date) -> int:
    """Grid column of a date: Monday=0 ... Sunday=6."""
    return d.weekday()


def week_start(d: date) -> date:
    """
    The Monday on or before d.

    Uses the ISO convention (Monday=1 ... Sunday=7), so a Sunday rolls back
    six days and any other day rolls back isoweekday-1 days.
    """
    return d - timedelta(days=d.isoweekday() - 1)


def month_start(d: date) -> date:
    return d.replace(day=1)


def year_start(d: date) -> date:
    return date(d.year, 1, 1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_dates(d: date) -> list[date]:
    """Every date of the month containing d, in order."""
    first = month_start(d)
    return [first + timedelta(days=i) for i in range(days_in_month(d.year, d.month))]


def build_week_days(anchor: date) -> list[date]:
    """The seven dates of the week containing anchor, Monday first."""
    start = week_start(anchor)
    return [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def build_month_grid(month_anchor: date) -> list[CalendarDateCell]:
    """
    Build the 6x7 Monday-first grid for the month containing month_anchor.

    The month's own days are preceded by the trailing days of the previous
    month and followed by the leading days of the next month so that the
    grid always holds exactly 42 cells in ascending date order.
    """
    first_day = month_start(month_anchor)
    leading = monday_based_weekday(first_day)
    grid_start = first_day - timedelta(days=leading)

    cells = []
    for i in range(MONTH_GRID_CELLS):
        cell_date = grid_start + timedelta(days=i)
        is_current = cell_date.year == first_day.year and cell_date.month == first_day.month
        cells.append(CalendarDateCell(cell_date, is_current))
    return cells


def build_year_months(year_anchor: date) -> list[list[CalendarDateCell]]:
    """Twelve month grids, January to December of year_anchor's year."""
    return [build_month_grid(date(year_anchor.year, month, 1)) for month in range(1, 13)]


def is_same_day(a: date, b: date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def is_today(d: date, today: Optional[date] = None) -> bool:
    if today is None:
        today = local_today()
    return is_same_day(d, today)
