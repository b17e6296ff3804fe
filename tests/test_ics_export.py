"""
Unit tests for the iCalendar export.
"""

from datetime import date, datetime

import recurring_ical_events
from icalendar import Calendar

from backend.ics_export import PRODID, export_ics, first_occurrence, schedules_to_calendar
from tests.conftest import make_schedule


TERM_START = date(2024, 1, 3)  # a Wednesday


class TestFirstOccurrence:
    """Test first_occurrence()."""

    def test_later_in_the_week(self):
        assert first_occurrence(make_schedule(day="Friday"), TERM_START) == date(2024, 1, 5)

    def test_same_day(self):
        assert first_occurrence(make_schedule(day="Wednesday"), TERM_START) == TERM_START

    def test_next_week(self):
        assert first_occurrence(make_schedule(day="Monday"), TERM_START) == date(2024, 1, 8)


class TestSchedulesToCalendar:
    """Test the generated VCALENDAR."""

    def setup_method(self):
        self.lecture = make_schedule(id="lec", day="Monday", lecturer="Dr. Tan")
        self.lab = make_schedule(id="lab", course_code="CS102", course_name="Lab",
                                 day="thu", start_time="14:00", end_time="16:00", location="Lab 3")
        self.vcal = Calendar.from_ical(schedules_to_calendar([self.lecture, self.lab], TERM_START).to_ical())

    def test_calendar_properties(self):
        assert str(self.vcal["prodid"]) == PRODID
        assert str(self.vcal["version"]) == "2.0"

    def test_one_event_per_schedule(self):
        events = {str(e["uid"]): e for e in self.vcal.walk("VEVENT")}
        assert set(events) == {"lec", "lab"}

        lecture = events["lec"]
        assert str(lecture["summary"]) == "CS101 Intro to Programming"
        assert str(lecture["location"]) == "Room 101"
        assert str(lecture["description"]) == "Dr. Tan"
        assert lecture.decoded("dtstart") == datetime(2024, 1, 8, 9, 0)
        assert lecture.decoded("dtend") == datetime(2024, 1, 8, 10, 30)
        assert lecture["rrule"]["FREQ"] == ["WEEKLY"]
        assert lecture["rrule"]["BYDAY"] == ["MO"]

        assert "description" not in events["lab"]
        assert events["lab"]["rrule"]["BYDAY"] == ["TH"]

    def test_expands_to_weekly_occurrences(self):
        occurrences = recurring_ical_events.of(self.vcal).between(date(2024, 1, 1), date(2024, 2, 1))
        starts = sorted((str(e["uid"]), e.decoded("dtstart")) for e in occurrences)
        assert [s for uid, s in starts if uid == "lec"] == [
            datetime(2024, 1, d, 9, 0) for d in (8, 15, 22, 29)
        ]
        assert [s for uid, s in starts if uid == "lab"] == [
            datetime(2024, 1, d, 14, 0) for d in (4, 11, 18, 25)
        ]

    def test_empty_timetable(self):
        vcal = schedules_to_calendar([], TERM_START)
        assert list(vcal.walk("VEVENT")) == []


class TestExportIcs:
    """Test export_ics()."""

    def test_writes_file(self, tmp_path):
        path = export_ics([make_schedule()], tmp_path / "out" / "timetable.ics", TERM_START)
        assert path.exists()
        vcal = Calendar.from_ical(path.read_bytes())
        assert len(list(vcal.walk("VEVENT"))) == 1
