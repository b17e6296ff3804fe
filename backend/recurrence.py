"""
Recurrence matching of weekly schedules onto calendar dates.

A schedule occurs on a date exactly when its weekday equals the date's
weekday. Nothing else (term dates, the `week` label) is consulted.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from .date_grid import build_week_days, month_dates
from .schedule import ScheduleRecord
from .weekdays import day_name_to_index, sunday_based_weekday


@dataclass(frozen=True)
class Occurrence:
    """A schedule placed on one concrete date."""
    date: date
    schedule: ScheduleRecord


def matches(schedule: ScheduleRecord, d: date) -> bool:
    """True iff the schedule's weekday is the weekday of d."""
    return day_name_to_index(schedule.day) == sunday_based_weekday(d)


def schedules_for_date(schedules: Iterable[ScheduleRecord], d: date) -> list[ScheduleRecord]:
    """Schedules occurring on d, in input order."""
    return [s for s in schedules if matches(s, d)]


def schedules_for_date_range(schedules: Iterable[ScheduleRecord],
                             dates: Sequence[date]) -> list[ScheduleRecord]:
    """
    Schedules that occur on at least one of the dates, each listed once.

    This is the set form used by the month and year views for counting.
    Input order is preserved.
    """
    weekdays = {sunday_based_weekday(d) for d in dates}
    return [s for s in schedules if day_name_to_index(s.day) in weekdays]


def occurrences_for_dates(schedules: Sequence[ScheduleRecord],
                          dates: Iterable[date]) -> list[Occurrence]:
    """
    One Occurrence per matching (date, schedule) pair.

    This is the per-date form used by the day and week views for placement.
    Ordered by the given dates, then by input order.
    """
    result = []
    for d in dates:
        for schedule in schedules:
            if matches(schedule, d):
                result.append(Occurrence(d, schedule))
    return result


def schedules_by_date(schedules: Sequence[ScheduleRecord],
                      dates: Iterable[date]) -> dict[date, list[ScheduleRecord]]:
    """Map every given date to the schedules occurring on it."""
    return {d: schedules_for_date(schedules, d) for d in dates}


def schedule_count_for_date(schedules: Iterable[ScheduleRecord], d: date) -> int:
    return sum(1 for s in schedules if matches(s, d))


def schedules_for_week(schedules: Iterable[ScheduleRecord], anchor: date) -> list[ScheduleRecord]:
    """Schedules occurring in the Monday-Sunday week containing anchor."""
    return schedules_for_date_range(schedules, build_week_days(anchor))


def schedules_for_month(schedules: Iterable[ScheduleRecord], anchor: date) -> list[ScheduleRecord]:
    """Schedules occurring on any real day of the month containing anchor."""
    return schedules_for_date_range(schedules, month_dates(anchor))


def group_schedules_by_day(schedules: Iterable[ScheduleRecord]) -> dict[int, list[ScheduleRecord]]:
    """Group schedules by Sunday-based weekday index, keeping input order."""
    grouped: dict[int, list[ScheduleRecord]] = {}
    for schedule in schedules:
        grouped.setdefault(day_name_to_index(schedule.day), []).append(schedule)
    return grouped
