"""
Unit tests for calendar strip date generation.
"""

from datetime import date, datetime, timedelta

import pytest

from timeless.core.dates import (
    format_tick_label,
    generate_date_range,
    make_tick,
    month_groups,
    normalize_date,
    parse_date,
    starts_new_month,
)


class TestGenerateDateRange:
    """Test cases for generate_date_range."""

    def test_single_day(self):
        ticks = generate_date_range(date(2025, 7, 30), date(2025, 7, 30))

        assert len(ticks) == 1
        assert ticks[0].iso_key == "2025-07-30"
        assert ticks[0].display_label == "JUL. 30"
        assert ticks[0].month_name == "July"

    def test_length_is_inclusive_day_count(self):
        start, end = date(2024, 9, 1), date(2025, 12, 31)

        ticks = generate_date_range(start, end)

        assert len(ticks) == (end - start).days + 1
        assert ticks[0].day == start
        assert ticks[-1].day == end

    def test_consecutive_days_strictly_ascending(self):
        ticks = generate_date_range(date(2024, 2, 27), date(2024, 3, 2))

        for previous, current in zip(ticks, ticks[1:]):
            assert current.day - previous.day == timedelta(days=1)

        # Leap day is included
        assert "2024-02-29" in [tick.iso_key for tick in ticks]

    def test_start_after_end_is_empty(self):
        assert generate_date_range(date(2025, 1, 2), date(2025, 1, 1)) == []

    def test_accepts_strings_and_datetimes(self):
        ticks = generate_date_range("2025-07-30T00:00:00Z", datetime(2025, 8, 1, 23, 59))

        assert [tick.iso_key for tick in ticks] == ["2025-07-30", "2025-07-31", "2025-08-01"]

    def test_month_names_do_not_depend_on_locale(self):
        ticks = generate_date_range(date(2025, 1, 31), date(2025, 2, 1))

        assert [tick.month_name for tick in ticks] == ["January", "February"]
        assert [tick.display_label for tick in ticks] == ["JAN. 31", "FEB. 1"]


class TestParsing:
    """Test cases for date parsing helpers."""

    def test_parse_date_from_date(self):
        assert parse_date(date(2025, 7, 30)) == date(2025, 7, 30)

    def test_parse_date_from_datetime_drops_time(self):
        assert parse_date(datetime(2025, 7, 30, 23, 30)) == date(2025, 7, 30)

    def test_parse_date_ignores_time_part_of_strings(self):
        assert parse_date("2025-07-30T23:59:59+09:00") == date(2025, 7, 30)

    @pytest.mark.parametrize("value", ["", "30/07/2025", "not a date", None, 20250730])
    def test_parse_date_invalid(self, value):
        with pytest.raises(ValueError):
            parse_date(value)

    def test_normalize_date(self):
        assert normalize_date(datetime(2025, 7, 30, 12, 0)) == "2025-07-30"

    def test_format_tick_label(self):
        assert format_tick_label(date(2024, 9, 1)) == "SEP. 1"


class TestMonthGrouping:
    """Test cases for month boundaries on the strip."""

    def test_starts_new_month(self):
        ticks = generate_date_range(date(2025, 7, 30), date(2025, 8, 2))

        flags = [starts_new_month(ticks, position) for position in range(len(ticks))]

        assert flags == [True, False, True, False]

    def test_month_groups(self):
        ticks = generate_date_range(date(2025, 7, 30), date(2025, 9, 1))

        groups = month_groups(ticks)

        assert [name for name, _ in groups] == ["July", "August", "September"]
        assert [len(group) for _, group in groups] == [2, 31, 1]

    def test_month_groups_empty(self):
        assert month_groups([]) == []

    def test_make_tick_is_immutable(self):
        tick = make_tick(date(2025, 7, 30))

        with pytest.raises(AttributeError):
            tick.iso_key = "2025-07-31"  # type: ignore[misc]
