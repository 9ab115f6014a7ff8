"""Unit tests for installment math and repayment schedules"""

import pytest
from datetime import date
from credit_engine.domain.exceptions import ValidationError
from credit_engine.domain.installments import calculate_monthly_installment, generate_repayment_schedule


def test_monthly_installment_standard_annuity():
    """100000 at 12% over 12 months"""
    assert calculate_monthly_installment(100000, 12, 12) == pytest.approx(8884.88, abs=0.01)


def test_monthly_installment_zero_rate():
    """Zero rate splits the principal evenly instead of dividing by zero"""
    assert calculate_monthly_installment(100000, 0, 10) == 10000


def test_monthly_installment_negligible_rate():
    """A rate too small to change 1 + r is repaid like a zero rate"""
    assert calculate_monthly_installment(100000, 1e-14, 10) == 10000


def test_monthly_installment_higher_rate_costs_more():
    assert calculate_monthly_installment(100000, 16, 12) > calculate_monthly_installment(100000, 12, 12)


@pytest.mark.parametrize("tenure", [0, -3, 1.5, True])
def test_monthly_installment_rejects_bad_tenure(tenure):
    with pytest.raises(ValidationError) as exc_info:
        calculate_monthly_installment(100000, 12, tenure)

    assert exc_info.value.errors[0]["field"] == "tenure"


def test_repayment_schedule_length_and_dates():
    """Monthly due dates, clamped to month end"""
    schedule = generate_repayment_schedule(100000, 12, 12, date(2025, 1, 31))

    assert len(schedule) == 12
    assert [item.number for item in schedule] == list(range(1, 13))
    assert schedule[0].due_date == date(2025, 2, 28)
    assert schedule[1].due_date == date(2025, 3, 31)
    assert schedule[-1].due_date == date(2026, 1, 31)


def test_repayment_schedule_pays_off_principal():
    """Last installment absorbs rounding so the balance ends at 0"""
    schedule = generate_repayment_schedule(100000, 12, 12, date(2025, 1, 1))

    assert schedule[-1].balance == 0
    assert sum(item.principal for item in schedule) == pytest.approx(100000, abs=0.01)
    assert schedule[0].interest == 1000.0  # 1% of 100000
    assert schedule[0].amount == 8884.88
    assert schedule[-1].amount == pytest.approx(8884.88, abs=0.05)


def test_repayment_schedule_zero_rate():
    schedule = generate_repayment_schedule(100000, 0, 10, date(2025, 1, 1))

    assert all(item.amount == 10000 for item in schedule)
    assert all(item.interest == 0 for item in schedule)
    assert schedule[-1].balance == 0
