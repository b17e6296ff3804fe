"""
View navigation: which granularity is shown and which date it is anchored on.

ViewState is an immutable value. Every navigation action takes the current
state and returns the next one, so several calendars can navigate
independently and tests need no global setup.
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Union

from .date_grid import (
    build_month_grid, build_week_days, week_start, month_start, year_start
)
from .time_utils import local_today


class ViewType(Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Union[str, 'ViewType']) -> 'ViewType':
        """Accept a ViewType or its case-insensitive name ("week", "Month")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown view: {value!r}") from None


class Direction(Enum):
    PREVIOUS = "previous"
    NEXT = "next"

    @property
    def sign(self) -> int:
        return -1 if self is Direction.PREVIOUS else 1


@dataclass(frozen=True)
class ViewState:
    mode: ViewType
    anchor_date: date


def initial_state(mode: ViewType = ViewType.WEEK, today: Optional[date] = None) -> ViewState:
    """State shown at start-up: the given view anchored on today."""
    if today is None:
        today = local_today()
    return ViewState(mode, today)


def _shift_months(d: date, months: int) -> date:
    """First day of the month `months` away from d's month."""
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    return date(year, month + 1, 1)


def _shift_years(d: date, years: int) -> date:
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return d.replace(year=d.year + years, day=28)


def step(state: ViewState, direction: Union[Direction, str]) -> ViewState:
    """
    Move one period backwards or forwards.

    Day: 1 day. Week: 7 days. Month: one calendar month, landing on the 1st
    so that month lengths never overflow. Year: one year.
    """
    sign = Direction(direction).sign
    anchor = state.anchor_date
    if state.mode == ViewType.DAY:
        new_anchor = anchor + timedelta(days=sign)
    elif state.mode == ViewType.WEEK:
        new_anchor = anchor + timedelta(weeks=sign)
    elif state.mode == ViewType.MONTH:
        new_anchor = _shift_months(anchor, sign)
    else:  # YEAR
        new_anchor = _shift_years(anchor, sign)
    return replace(state, anchor_date=new_anchor)


def go_previous(state: ViewState) -> ViewState:
    return step(state, Direction.PREVIOUS)


def go_next(state: ViewState) -> ViewState:
    return step(state, Direction.NEXT)


def go_today(state: ViewState, today: Optional[date] = None) -> ViewState:
    """Anchor on today, keeping the current view."""
    if today is None:
        today = local_today()
    return replace(state, anchor_date=today)


def switch_view(state: ViewState, mode: Union[ViewType, str],
                today: Optional[date] = None) -> ViewState:
    """
    Change the view and snap the anchor to the start of the new period
    containing today (not the previous anchor):

    - day:   today
    - week:  Monday of this week
    - month: first of this month
    - year:  1 January of this year
    """
    mode = ViewType.parse(mode)
    if today is None:
        today = local_today()
    if mode == ViewType.DAY:
        anchor = today
    elif mode == ViewType.WEEK:
        anchor = week_start(today)
    elif mode == ViewType.MONTH:
        anchor = month_start(today)
    else:  # YEAR
        anchor = year_start(today)
    return ViewState(mode, anchor)


def open_day(state: ViewState, d: date) -> ViewState:
    """Drill down from a month cell to the day view of that date."""
    return ViewState(ViewType.DAY, d)


def open_month(state: ViewState, d: date) -> ViewState:
    """Drill down from the year view to the month containing d."""
    return ViewState(ViewType.MONTH, month_start(d))


def visible_dates(state: ViewState) -> list[date]:
    """
    Dates a renderer shows for the state, ascending.

    Day: the anchor. Week: Monday to Sunday. Month: the 42 grid cells,
    padding included. Year: every date of the anchor's year.
    """
    anchor = state.anchor_date
    if state.mode == ViewType.DAY:
        return [anchor]
    if state.mode == ViewType.WEEK:
        return build_week_days(anchor)
    if state.mode == ViewType.MONTH:
        return [cell.date for cell in build_month_grid(anchor)]
    first = year_start(anchor)
    last = date(anchor.year, 12, 31)
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def visible_range(state: ViewState) -> tuple[date, date]:
    """First and last visible date."""
    dates = visible_dates(state)
    return dates[0], dates[-1]
