"""
Tests for the calendar day counter
"""
from datetime import date, timedelta

import pytest

from leavedesk.services.day_counter import DayCount, count_days, is_weekend


def test_single_weekday():
    # 2024-07-15 is a Monday
    assert count_days(date(2024, 7, 15), date(2024, 7, 15)) == DayCount(
        total_days=1, working_days=1, weekend_days=0, holiday_days=0
    )


def test_single_weekend_day():
    result = count_days(date(2024, 7, 13), date(2024, 7, 13))
    assert result.total_days == 1
    assert result.working_days == 0
    assert result.weekend_days == 1


@pytest.mark.parametrize("offset", range(7))
def test_any_seven_day_span_has_two_weekend_days(offset):
    start = date(2024, 7, 1) + timedelta(days=offset)
    result = count_days(start, start + timedelta(days=6))
    assert result.total_days == 7
    assert result.working_days + result.weekend_days == 7
    assert result.weekend_days == 2


def test_four_full_weeks():
    # Monday 2024-08-05 to Friday 2024-08-30
    result = count_days(date(2024, 8, 5), date(2024, 8, 30))
    assert result.working_days == 20
    assert result.weekend_days == 6
    assert result.total_days == 26


def test_range_across_year_end():
    # Friday 2024-12-27 to Thursday 2025-01-02
    result = count_days(date(2024, 12, 27), date(2025, 1, 2))
    assert result.total_days == 7
    assert result.working_days == 5


def test_end_before_start_is_empty():
    result = count_days(date(2024, 7, 20), date(2024, 7, 10))
    assert result == DayCount(total_days=0, working_days=0, weekend_days=0, holiday_days=0)


def test_holidays_are_never_counted():
    result = count_days(date(2024, 12, 23), date(2024, 12, 27))
    assert result.holiday_days == 0
    assert result.working_days == 5


def test_is_weekend():
    assert is_weekend(date(2024, 7, 13))
    assert is_weekend(date(2024, 7, 14))
    assert not is_weekend(date(2024, 7, 15))
