"""
Unit tests for weekly recurrence matching.
"""

from datetime import date

from backend.date_grid import build_week_days
from backend.recurrence import (
    Occurrence,
    group_schedules_by_day,
    matches,
    occurrences_for_dates,
    schedule_count_for_date,
    schedules_by_date,
    schedules_for_date,
    schedules_for_date_range,
    schedules_for_month,
    schedules_for_week,
)
from backend.weekdays import sunday_based_weekday
from tests.conftest import MONDAY, make_schedule


class TestMatches:
    """Test matches()."""

    def test_tuesday_matches_only_tuesdays_of_a_week(self):
        schedule = make_schedule(day="Tuesday")
        for d in build_week_days(MONDAY):
            assert matches(schedule, d) == (sunday_based_weekday(d) == 2)

    def test_every_descriptor_form(self):
        tuesday = date(2024, 1, 2)
        for day in ("Tuesday", "tue", "TU", "2", 2):
            assert matches(make_schedule(day=day), tuesday)

    def test_week_label_is_ignored(self):
        schedule = make_schedule(day="Monday", week="Week 3")
        assert matches(schedule, date(2024, 1, 1))
        assert matches(schedule, date(2031, 6, 2))

    def test_unrecognised_day_matches_sundays(self):
        schedule = make_schedule(day="someday")
        assert matches(schedule, date(2024, 1, 7))
        assert not matches(schedule, date(2024, 1, 8))


class TestSchedulesForDate:
    """Test schedules_for_date() and friends."""

    def test_filters_and_keeps_order(self):
        a = make_schedule(id="a", day="Monday", start_time="14:00", end_time="15:00")
        b = make_schedule(id="b", day="Tuesday")
        c = make_schedule(id="c", day="monday", start_time="08:00", end_time="09:00")
        assert schedules_for_date([a, b, c], MONDAY) == [a, c]

    def test_no_matches(self):
        assert schedules_for_date([make_schedule(day="Friday")], MONDAY) == []

    def test_count(self):
        schedules = [make_schedule(id=str(i), day="Wednesday") for i in range(3)]
        assert schedule_count_for_date(schedules, date(2024, 1, 3)) == 3
        assert schedule_count_for_date(schedules, date(2024, 1, 4)) == 0

    def test_by_date(self):
        mon = make_schedule(id="mon", day="Monday")
        result = schedules_by_date([mon], build_week_days(MONDAY))
        assert result[MONDAY] == [mon]
        assert sum(len(v) for v in result.values()) == 1


class TestDateRange:
    """Test the set form and the per-date form over a range of dates."""

    def setup_method(self):
        self.mon = make_schedule(id="mon", day="Monday")
        self.sat = make_schedule(id="sat", day="Saturday")
        self.wed = make_schedule(id="wed", day="Wednesday")
        self.schedules = [self.mon, self.sat, self.wed]

    def test_set_form_lists_each_schedule_once(self):
        january = [date(2024, 1, d) for d in range(1, 32)]
        assert schedules_for_date_range(self.schedules, january) == self.schedules

    def test_set_form_only_matching_weekdays(self):
        weekend = [date(2024, 1, 6), date(2024, 1, 7)]
        assert schedules_for_date_range(self.schedules, weekend) == [self.sat]

    def test_per_date_form(self):
        january = [date(2024, 1, d) for d in range(1, 32)]
        occurrences = occurrences_for_dates([self.mon], january)
        assert [o.date for o in occurrences] == [date(2024, 1, d) for d in (1, 8, 15, 22, 29)]
        assert all(isinstance(o, Occurrence) and o.schedule is self.mon for o in occurrences)

    def test_per_date_form_is_date_then_input_order(self):
        week = build_week_days(MONDAY)
        occurrences = occurrences_for_dates(self.schedules, week)
        assert [o.schedule.id for o in occurrences] == ["mon", "wed", "sat"]

    def test_week_and_month(self):
        assert schedules_for_week(self.schedules, date(2024, 1, 4)) == self.schedules
        # February 2024 has every weekday
        assert schedules_for_month(self.schedules, date(2024, 2, 1)) == self.schedules

    def test_empty_range(self):
        assert schedules_for_date_range(self.schedules, []) == []


class TestGroupSchedulesByDay:
    """Test group_schedules_by_day()."""

    def test_grouping(self):
        a = make_schedule(id="a", day="Friday")
        b = make_schedule(id="b", day="fri")
        c = make_schedule(id="c", day="Sunday")
        assert group_schedules_by_day([a, b, c]) == {5: [a, b], 0: [c]}
