"""
Unit tests for block layout in the day and week views.
"""

from datetime import datetime

import pytest

from backend.errors import InvalidDurationError, MalformedTimeError
from backend.layout import (
    BlockPosition,
    assign_columns,
    block_position,
    current_time_offset,
    layout_column,
    offset_to_time,
    schedules_in_slot,
)
from backend.time_utils import minutes_to_time
from tests.conftest import make_schedule


class TestBlockPosition:
    """Test block_position()."""

    def test_friday_morning_lecture(self):
        schedule = make_schedule(day="Friday", start_time="08:00", end_time="09:30")
        position = block_position(schedule.start_time, schedule.end_time, 60)
        assert position == BlockPosition(top=480.0, height=90.0)

    def test_scales_with_hour_height(self):
        assert block_position("10:15", "11:00", 48) == BlockPosition(top=492.0, height=36.0)

    def test_measured_from_first_hour(self):
        assert block_position("08:00", "09:00", 60, first_hour=7) == BlockPosition(top=60.0, height=60.0)

    def test_positive_height_for_every_valid_pair(self):
        quarter_hours = [minutes_to_time(m) for m in range(0, 24 * 60, 15)] + ["23:59"]
        for i, start in enumerate(quarter_hours):
            for end in quarter_hours[i + 1:]:
                position = block_position(start, end, 60)
                assert position.height > 0
                assert position.top >= 0

    @pytest.mark.parametrize("start,end", [("10:00", "10:00"), ("11:00", "10:00")])
    def test_empty_or_negative_span(self, start, end):
        with pytest.raises(InvalidDurationError):
            block_position(start, end, 60)

    def test_malformed_time(self):
        with pytest.raises(MalformedTimeError):
            block_position("8am", "09:00", 60)


class TestCurrentTimeOffset:
    """Test current_time_offset()."""

    def test_offset_of_given_time(self):
        assert current_time_offset(60, now=datetime(2024, 1, 1, 14, 30)) == 870.0

    def test_offset_from_first_hour(self):
        assert current_time_offset(40, now=datetime(2024, 1, 1, 9, 0), first_hour=8) == 40.0


class TestOffsetToTime:
    """Test offset_to_time()."""

    def test_snaps_to_half_hours(self):
        assert offset_to_time(100, 60) == "01:30"
        assert offset_to_time(90, 60, first_hour=7) == "08:30"

    def test_no_snapping(self):
        assert offset_to_time(75, 60, snap_minutes=0) == "01:15"

    def test_clamped(self):
        assert offset_to_time(-50, 60) == "00:00"
        assert offset_to_time(10_000, 60) == "23:59"


class TestSchedulesInSlot:
    """Test schedules_in_slot()."""

    def test_all_overlapping_schedules(self):
        a = make_schedule(id="a", start_time="09:00", end_time="10:00")
        b = make_schedule(id="b", start_time="09:30", end_time="11:00")
        c = make_schedule(id="c", start_time="10:00", end_time="11:00")
        assert schedules_in_slot([a, b, c], "09:00", "10:00") == [a, b]
        assert schedules_in_slot([a, b, c], "11:00", "12:00") == []


class TestAssignColumns:
    """Test assign_columns()."""

    def test_no_overlap_uses_one_column(self):
        a = make_schedule(id="a", start_time="09:00", end_time="10:00")
        b = make_schedule(id="b", start_time="10:00", end_time="11:00")
        result = assign_columns([a, b])
        assert [(r.column, r.total_columns) for r in result] == [(0, 1), (0, 1)]

    def test_simultaneous_schedules_side_by_side(self):
        a = make_schedule(id="a", start_time="09:00", end_time="10:00")
        b = make_schedule(id="b", start_time="09:00", end_time="10:00")
        result = assign_columns([a, b])
        assert sorted(r.column for r in result) == [0, 1]
        assert all(r.total_columns == 2 for r in result)

    def test_chain_reuses_freed_column(self):
        a = make_schedule(id="a", start_time="09:00", end_time="10:30")
        b = make_schedule(id="b", start_time="10:00", end_time="11:00")
        c = make_schedule(id="c", start_time="10:30", end_time="12:00")
        d = make_schedule(id="d", start_time="14:00", end_time="15:00")
        result = assign_columns([a, b, c, d])
        assert [r.schedule.id for r in result] == ["a", "b", "c", "d"]
        assert [(r.column, r.total_columns) for r in result] == [(0, 2), (1, 2), (0, 2), (0, 1)]

    def test_empty(self):
        assert assign_columns([]) == []


class TestLayoutColumn:
    """Test layout_column()."""

    def test_combines_position_and_columns(self):
        a = make_schedule(id="a", start_time="08:00", end_time="09:30")
        b = make_schedule(id="b", start_time="09:00", end_time="10:00")
        blocks = layout_column([a, b], 60, first_hour=7)
        assert [(bl.top, bl.height, bl.column, bl.total_columns) for bl in blocks] == [
            (60.0, 90.0, 0, 2),
            (120.0, 60.0, 1, 2),
        ]
