"""
Class Timetable GUI Module

PySide6-based graphical interface for the timetable application.
"""

from .main_window import MainWindow
from .schedule_dialog import ScheduleDialog

__all__ = ['MainWindow', 'ScheduleDialog']
