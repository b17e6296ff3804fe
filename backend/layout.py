"""
Vertical layout of schedule blocks in the day and week views.

A day column is a fixed number of pixels per hour. block_position() maps a
schedule's start/end time to a top offset and a height in that column.
It does not look at other schedules: simultaneous classes get the same
coordinates. assign_columns() is the separate step that spreads overlapping
schedules side by side when a renderer wants that.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from .errors import InvalidDurationError
from .schedule import ScheduleRecord
from .time_utils import time_to_minutes, minutes_to_time, now_minutes, MINUTES_PER_DAY


@dataclass(frozen=True)
class BlockPosition:
    top: float
    height: float


@dataclass(frozen=True)
class ColumnAssignment:
    """Side-by-side slot of a schedule within its overlap group."""
    schedule: ScheduleRecord
    column: int
    total_columns: int


@dataclass(frozen=True)
class PlacedBlock:
    """Everything a renderer needs to draw one schedule in a day column."""
    schedule: ScheduleRecord
    top: float
    height: float
    column: int
    total_columns: int


def block_position(start_time: str, end_time: str, hour_height: float,
                   first_hour: int = 0) -> BlockPosition:
    """
    Compute top offset and height of a block.

    top = minutes(start) / 60 * hour_height, measured from first_hour
    (midnight by default); height = duration in hours * hour_height.

    Raises:
        MalformedTimeError: if either time is not HH:MM.
        InvalidDurationError: if the resulting height is not positive.
    """
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    top = (start - first_hour * 60) / 60 * hour_height
    height = (end - start) / 60 * hour_height
    if height <= 0:
        raise InvalidDurationError(
            f"Block {start_time}-{end_time} has no positive height ({height})"
        )
    return BlockPosition(top, height)


def current_time_offset(hour_height: float, now: Optional[datetime] = None,
                        first_hour: int = 0) -> float:
    """Offset of the current-time indicator line (only drawn on today's column)."""
    return (now_minutes(now) - first_hour * 60) / 60 * hour_height


def offset_to_time(y: float, hour_height: float, snap_minutes: int = 30,
                   first_hour: int = 0) -> str:
    """Convert a vertical offset back to an "HH:MM" time, snapped to snap_minutes."""
    hours = first_hour + y / hour_height
    hours = max(0, min(24, hours))
    total_minutes = int(hours * 60)
    if snap_minutes > 0:
        total_minutes = round(total_minutes / snap_minutes) * snap_minutes
    total_minutes = max(0, min(MINUTES_PER_DAY - 1, total_minutes))
    return minutes_to_time(total_minutes)


def _span(schedule: ScheduleRecord) -> tuple[int, int]:
    return time_to_minutes(schedule.start_time), time_to_minutes(schedule.end_time)


def _overlap(a: tuple[int, int], b: tuple[int, int]) -> bool:
    return a[0] < b[1] and b[0] < a[1]


def schedules_in_slot(schedules: Iterable[ScheduleRecord], start_time: str,
                      end_time: str) -> list[ScheduleRecord]:
    """All schedules that overlap the slot [start_time, end_time), in input order."""
    slot = (time_to_minutes(start_time), time_to_minutes(end_time))
    return [s for s in schedules if _overlap(_span(s), slot)]


def assign_columns(schedules: Sequence[ScheduleRecord]) -> list[ColumnAssignment]:
    """
    Assign side-by-side columns to overlapping schedules.

    Schedules are first merged into groups of transitively overlapping
    blocks; within each group every schedule takes the first column whose
    previous block has already ended (greedy interval partitioning). The
    result is in input order.
    """
    spans = [_span(s) for s in schedules]
    # Sort by start time, then by duration (longer first)
    order = sorted(range(len(schedules)), key=lambda i: (spans[i][0], -(spans[i][1] - spans[i][0])))

    groups: list[list[int]] = []
    for i in order:
        overlapping_groups = []
        for g, group in enumerate(groups):
            if any(_overlap(spans[i], spans[j]) for j in group):
                overlapping_groups.append(g)

        if not overlapping_groups:
            groups.append([i])
        elif len(overlapping_groups) == 1:
            groups[overlapping_groups[0]].append(i)
        else:
            merged = []
            for g in sorted(overlapping_groups, reverse=True):
                merged.extend(groups.pop(g))
            merged.append(i)
            groups.append(merged)

    placement: dict[int, tuple[int, int]] = {}
    for group in groups:
        group.sort(key=lambda i: spans[i][0])
        column_ends: list[int] = []
        columns: dict[int, int] = {}
        for i in group:
            start, end = spans[i]
            for col, col_end in enumerate(column_ends):
                if start >= col_end:
                    column_ends[col] = end
                    columns[i] = col
                    break
            else:
                columns[i] = len(column_ends)
                column_ends.append(end)
        for i in group:
            placement[i] = (columns[i], len(column_ends))

    return [ColumnAssignment(schedules[i], *placement[i]) for i in range(len(schedules))]


def layout_column(schedules: Sequence[ScheduleRecord], hour_height: float,
                  first_hour: int = 0) -> list[PlacedBlock]:
    """Positions and overlap columns for every schedule of one day column."""
    blocks = []
    for assignment in assign_columns(schedules):
        schedule = assignment.schedule
        position = block_position(schedule.start_time, schedule.end_time, hour_height, first_hour)
        blocks.append(PlacedBlock(
            schedule=schedule,
            top=position.top,
            height=position.height,
            column=assignment.column,
            total_columns=assignment.total_columns,
        ))
    return blocks
