"""
Unit tests for weekday normalisation (Sunday=0 index space).
"""

from datetime import date

import pytest

from backend import debug
from backend.errors import InvalidWeekdayError
from backend.weekdays import (
    DAY_NAMES,
    day_name_to_index,
    index_to_day_name,
    normalize_day_name,
    parse_day,
    sunday_based_weekday,
)


class TestDayNameToIndex:
    """Test day_name_to_index()."""

    @pytest.mark.parametrize("day,expected", [
        ("Monday", 1),
        ("mon", 1),
        ("MONDAY", 1),
        ("1", 1),
        (1, 1),
        ("Sunday", 0),
        ("Saturday", 6),
        ("  friday ", 5),
        ("6", 6),
    ])
    def test_recognised_days(self, day, expected):
        assert day_name_to_index(day) == expected

    @pytest.mark.parametrize("day", ["bogus", "", "7", "-1", 9, None])
    def test_unrecognised_days_fall_back_to_sunday(self, day):
        assert day_name_to_index(day) == 0

    def test_ambiguous_prefix_takes_first_in_sunday_order(self):
        """"t" and "s" are prefixes of two names each."""
        assert day_name_to_index("t") == 2
        assert day_name_to_index("s") == 0
        assert day_name_to_index("th") == 4
        assert day_name_to_index("sa") == 6

    def test_fallback_is_logged_in_debug_mode(self, capsys):
        debug.set_debug_enabled(True)
        day_name_to_index("someday")
        assert "WEEKDAY" in capsys.readouterr().err


class TestParseDay:
    """Test parse_day(), the explicit form without a default."""

    def test_unrecognised_returns_none(self):
        assert parse_day("bogus") is None
        assert parse_day("  ") is None
        assert parse_day(7) is None

    def test_bool_is_not_a_day(self):
        assert parse_day(True) is None

    def test_recognised(self):
        assert parse_day("wed") == 3
        assert parse_day(0) == 0


class TestIndexToDayName:
    """Test index_to_day_name()."""

    def test_every_index(self):
        assert [index_to_day_name(i) for i in range(7)] == DAY_NAMES

    def test_inverse_of_normaliser(self):
        for i in range(7):
            assert day_name_to_index(index_to_day_name(i)) == i

    @pytest.mark.parametrize("index", [-1, 7, "1", 1.0, True])
    def test_invalid_index(self, index):
        with pytest.raises(InvalidWeekdayError):
            index_to_day_name(index)


class TestNormalizeDayName:
    """Test normalize_day_name()."""

    def test_canonical_name(self):
        assert normalize_day_name("thu") == "Thursday"
        assert normalize_day_name(5) == "Friday"

    def test_unrecognised_passes_through(self):
        assert normalize_day_name("Funday") == "Funday"


class TestSundayBasedWeekday:
    """Test sunday_based_weekday()."""

    def test_week_of_2024_01_07(self):
        # Sunday 7 January 2024 through Saturday 13 January
        assert [sunday_based_weekday(date(2024, 1, d)) for d in range(7, 14)] == list(range(7))
