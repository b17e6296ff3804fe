"""
iCalendar export of the timetable.

Each schedule becomes one weekly recurring VEVENT. Times are written as
floating (naive) local times, so the receiving calendar shows them at the
same wall-clock time. The recurrence has no end date.
"""

from datetime import date, datetime, time as dt_time, timedelta
from pathlib import Path
from typing import Iterable

from icalendar import Calendar as ICalCalendar, Event as ICalEvent, vRecur

from .debug import debug_print
from .schedule import ScheduleRecord
from .time_utils import time_to_minutes
from .weekdays import day_name_to_index, sunday_based_weekday


PRODID = "-//Class Timetable//class-timetable//EN"

# RRULE BYDAY codes indexed Sunday=0
BYDAY_CODES = ["SU", "MO", "TU", "WE", "TH", "FR", "SA"]


def _to_time(value: str) -> dt_time:
    hours, minutes = divmod(time_to_minutes(value), 60)
    return dt_time(hour=hours, minute=minutes)


def first_occurrence(schedule: ScheduleRecord, term_start: date) -> date:
    """The first date on or after term_start on which the schedule occurs."""
    days_ahead = (day_name_to_index(schedule.day) - sunday_based_weekday(term_start)) % 7
    return term_start + timedelta(days=days_ahead)


def schedule_to_event(schedule: ScheduleRecord, term_start: date) -> ICalEvent:
    """Build the weekly VEVENT for one schedule."""
    first_date = first_occurrence(schedule, term_start)
    start_dt = datetime.combine(first_date, _to_time(schedule.start_time))
    end_dt = datetime.combine(first_date, _to_time(schedule.end_time))

    event = ICalEvent()
    event.add("uid", schedule.id)
    event.add("dtstamp", datetime.now())
    event.add("dtstart", start_dt)
    event.add("dtend", end_dt)
    event.add("summary", schedule.title)
    event.add("location", schedule.location)
    if schedule.lecturer:
        event.add("description", schedule.lecturer)
    event.add("rrule", vRecur(freq="WEEKLY", byday=BYDAY_CODES[day_name_to_index(schedule.day)]))
    return event


def schedules_to_calendar(schedules: Iterable[ScheduleRecord], term_start: date) -> ICalCalendar:
    """Build a VCALENDAR holding one recurring event per schedule."""
    vcal = ICalCalendar()
    vcal.add("prodid", PRODID)
    vcal.add("version", "2.0")
    vcal.add("calscale", "GREGORIAN")
    vcal.add("x-wr-calname", "Timetable")
    count = 0
    for schedule in schedules:
        vcal.add_component(schedule_to_event(schedule, term_start))
        count += 1
    debug_print("ICS", f"Built calendar with {count} events from {term_start.isoformat()}")
    return vcal


def export_ics(schedules: Iterable[ScheduleRecord], path: Path, term_start: date) -> Path:
    """Write the timetable to an .ics file and return its path."""
    path = Path(path)
    vcal = schedules_to_calendar(schedules, term_start)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(vcal.to_ical())
    debug_print("ICS", f"Exported timetable to {path}")
    return path
