"""
Leave eligibility - months of service and accrual estimate from the joining date.

Policy:
- No leave before 6 full months of service.
- After that, 1.5 days accrue for every further month of service.
"""
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from leavedesk.utils.datetime_utils import today as current_date

MIN_SERVICE_MONTHS = 6
ACCRUAL_DAYS_PER_MONTH = 1.5


@dataclass(frozen=True)
class Eligibility:
    is_eligible: bool
    months_of_service: int
    accrued_days: int

    @property
    def months_until_eligible(self) -> int:
        return max(0, MIN_SERVICE_MONTHS - self.months_of_service)


def months_of_service(date_of_joining: date, as_of: date) -> int:
    """
    Whole calendar months between date_of_joining and as_of.

    One month is taken off when the joining day-of-month has not come round
    yet in the as_of month (e.g. joined on the 20th, as_of the 15th).
    """
    months = (as_of.year - date_of_joining.year) * 12 + (as_of.month - date_of_joining.month)
    if as_of.day < date_of_joining.day:
        months -= 1
    return months


def evaluate_eligibility(date_of_joining: date, as_of: Optional[date] = None) -> Eligibility:
    """
    Evaluate leave eligibility for an employee.

    Args:
        date_of_joining: Employee joining date
        as_of: Evaluation date (defaults to today)

    Returns:
        Eligibility(is_eligible, months_of_service, accrued_days)
    """
    as_of = as_of or current_date()
    months = months_of_service(date_of_joining, as_of)
    is_eligible = months >= MIN_SERVICE_MONTHS
    accrued_days = math.floor((months - MIN_SERVICE_MONTHS) * ACCRUAL_DAYS_PER_MONTH) if is_eligible else 0
    return Eligibility(
        is_eligible=is_eligible,
        months_of_service=months,
        accrued_days=accrued_days,
    )
