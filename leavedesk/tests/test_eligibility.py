"""
Tests for leave eligibility and accrual
"""
from datetime import date

from leavedesk.services.eligibility_service import (
    ACCRUAL_DAYS_PER_MONTH,
    MIN_SERVICE_MONTHS,
    evaluate_eligibility,
    months_of_service,
)


def test_exactly_six_months_is_eligible_with_nothing_accrued():
    result = evaluate_eligibility(date(2024, 1, 15), date(2024, 7, 15))
    assert result.is_eligible is True
    assert result.months_of_service == 6
    assert result.accrued_days == 0


def test_eight_months_accrues_three_days():
    result = evaluate_eligibility(date(2023, 11, 15), date(2024, 7, 15))
    assert result.months_of_service == 8
    assert result.accrued_days == 3


def test_accrual_is_floored():
    # 7 months -> 1.5 -> 1
    result = evaluate_eligibility(date(2023, 12, 15), date(2024, 7, 15))
    assert result.accrued_days == 1


def test_day_of_month_not_reached_takes_a_month_off():
    assert months_of_service(date(2024, 1, 20), date(2024, 7, 15)) == 5
    result = evaluate_eligibility(date(2024, 1, 20), date(2024, 7, 15))
    assert result.is_eligible is False
    assert result.accrued_days == 0
    assert result.months_until_eligible == 1


def test_joined_2024_01_10_is_eligible_on_2024_07_15():
    result = evaluate_eligibility(date(2024, 1, 10), date(2024, 7, 15))
    assert result.is_eligible is True
    assert result.months_of_service == 6


def test_new_joiner():
    result = evaluate_eligibility(date(2024, 7, 1), date(2024, 7, 15))
    assert result.months_of_service == 0
    assert result.is_eligible is False
    assert result.months_until_eligible == MIN_SERVICE_MONTHS


def test_long_service():
    result = evaluate_eligibility(date(2020, 1, 1), date(2024, 1, 1))
    assert result.months_of_service == 48
    assert result.accrued_days == int((48 - MIN_SERVICE_MONTHS) * ACCRUAL_DAYS_PER_MONTH)
    assert result.months_until_eligible == 0


def test_defaults_to_today():
    result = evaluate_eligibility(date(2000, 1, 1))
    assert result.is_eligible is True
