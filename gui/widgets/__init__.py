"""
Class Timetable GUI Widgets

Custom widgets for displaying the timetable.
"""

from .schedule_widget import ScheduleWidget
from .calendar_widget import CalendarWidget, DayView, WeekView, MonthView, YearView

__all__ = ['ScheduleWidget', 'CalendarWidget', 'DayView', 'WeekView', 'MonthView', 'YearView']
