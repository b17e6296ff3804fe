"""
Class Timetable Backend Module

This module provides the calendar engine behind the timetable views:
- Configuration parsing (config.py)
- Time and weekday normalisation (time_utils.py, weekdays.py)
- Calendar grids for week, month and year views (date_grid.py)
- Recurrence matching of weekly schedules onto dates (recurrence.py)
- Block layout for the day and week views (layout.py)
- View navigation state (navigation.py)
- Schedule storage (schedule_store.py) and iCalendar export (ics_export.py)
"""

from .config import Config
from .errors import (
    TimetableError, MalformedTimeError, InvalidDurationError, InvalidWeekdayError,
    ScheduleValidationError, ScheduleNotFoundError,
)
from .time_utils import time_to_minutes, minutes_to_time
from .weekdays import day_name_to_index, index_to_day_name
from .date_grid import (
    CalendarDateCell, build_month_grid, build_week_days, build_year_months, week_start
)
from .recurrence import matches, schedules_for_date, schedules_for_date_range
from .layout import block_position, current_time_offset
from .navigation import ViewType, ViewState, step, go_today, switch_view
from .schedule import ScheduleRecord
from .schedule_store import ScheduleStore, JsonScheduleStore, InMemoryScheduleStore

__all__ = [
    'Config',
    'TimetableError',
    'MalformedTimeError',
    'InvalidDurationError',
    'InvalidWeekdayError',
    'ScheduleValidationError',
    'ScheduleNotFoundError',
    'time_to_minutes',
    'minutes_to_time',
    'day_name_to_index',
    'index_to_day_name',
    'CalendarDateCell',
    'build_month_grid',
    'build_week_days',
    'build_year_months',
    'week_start',
    'matches',
    'schedules_for_date',
    'schedules_for_date_range',
    'block_position',
    'current_time_offset',
    'ViewType',
    'ViewState',
    'step',
    'go_today',
    'switch_view',
    'ScheduleRecord',
    'ScheduleStore',
    'JsonScheduleStore',
    'InMemoryScheduleStore',
]
