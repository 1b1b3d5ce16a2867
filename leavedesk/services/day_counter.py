"""
Calendar day counter - classifies each day of a leave range.

Saturday and Sunday are weekend days; every other day is a working day.
Holidays are not implemented yet: there is no holiday calendar, so
``holiday_days`` is always 0 and no day is ever classified as a holiday.
"""
from dataclasses import dataclass
from datetime import date, timedelta

# date.weekday(): Monday=0 ... Saturday=5, Sunday=6
WEEKEND_WEEKDAYS = frozenset({5, 6})


@dataclass(frozen=True)
class DayCount:
    total_days: int
    working_days: int
    weekend_days: int
    holiday_days: int = 0


def is_weekend(check_date: date) -> bool:
    """Check if a date falls on Saturday or Sunday"""
    return check_date.weekday() in WEEKEND_WEEKDAYS


def count_days(start_date: date, end_date: date) -> DayCount:
    """
    Count days between start_date and end_date, both inclusive.

    Dates are plain calendar dates; no timezone conversion happens here.
    If end_date is before start_date the range is empty and every count is 0;
    callers decide whether an empty range is acceptable.

    Returns:
        DayCount where total_days = working_days + weekend_days + holiday_days
    """
    working_days = 0
    weekend_days = 0

    current_date = start_date
    while current_date <= end_date:
        if is_weekend(current_date):
            weekend_days += 1
        else:
            working_days += 1
        current_date += timedelta(days=1)

    return DayCount(
        total_days=working_days + weekend_days,
        working_days=working_days,
        weekend_days=weekend_days,
        holiday_days=0,
    )
