"""Installment (EMI) math for flat-rate amortized loans"""

from datetime import date
from typing import List

from credit_engine.domain.exceptions import ValidationError
from credit_engine.domain.models import ScheduledInstallment
from credit_engine.utils.date_utils import add_months
from credit_engine.utils.numbers import round_currency


def _validate_tenure(tenure_months: int) -> None:
    if isinstance(tenure_months, bool) or not isinstance(tenure_months, int) or tenure_months <= 0:
        raise ValidationError.for_field("tenure", "tenure must be a positive whole number of months")


def calculate_monthly_installment(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
) -> float:
    """
    Fixed monthly payment for a principal/rate/tenure triple.

        r = annual_rate_percent / 1200
        M = P * r / (1 - (1 + r) ** -n)

    A zero rate makes the formula divide by zero, so it is repaid as P / n.
    The result is not rounded; callers round when persisting.

    Example:
        100000 at 12% over 12 months -> 8884.88...
        100000 at 0% over 10 months  -> 10000.0
    """
    _validate_tenure(tenure_months)

    monthly_rate = annual_rate_percent / 1200
    discount = (1 + monthly_rate) ** -tenure_months
    # rates too small to move 1 + r behave like zero
    if monthly_rate == 0 or discount == 1:
        return principal / tenure_months

    return principal * monthly_rate / (1 - discount)


def generate_repayment_schedule(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
    start_date: date,
) -> List[ScheduledInstallment]:
    """
    Generate the monthly amortization schedule for a loan.

    Requirements:
    - One installment per month, first due one month after start_date
    - Each payment splits into interest on the remaining balance plus principal
    - Last installment absorbs rounding drift so the balance ends at exactly 0
    """
    payment = round_currency(calculate_monthly_installment(principal, annual_rate_percent, tenure_months))
    monthly_rate = annual_rate_percent / 1200

    balance = principal
    schedule = []
    for number in range(1, tenure_months + 1):
        interest = round_currency(balance * monthly_rate)

        if number == tenure_months:
            principal_part = round_currency(balance)
            amount = round_currency(principal_part + interest)
        else:
            principal_part = round_currency(payment - interest)
            amount = payment

        balance = round_currency(balance - principal_part)
        schedule.append(
            ScheduledInstallment(
                number=number,
                due_date=add_months(start_date, number),
                amount=amount,
                interest=interest,
                principal=principal_part,
                balance=balance,
            )
        )

    return schedule
