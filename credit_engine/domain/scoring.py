"""Credit scoring engine - loan history to a 0-100 score"""

from datetime import datetime
from typing import Sequence

from credit_engine.domain.models import Customer, Loan, LoanHistoryFactors
from credit_engine.utils.numbers import round_half_up

EXPIRED_TERM_POINTS = 5
LOAN_TAKEN_POINTS = 10
VOLUME_DIVISOR = 1000
OVERLEVERAGE_SALARY_RATIO = 0.5
MIN_SCORE = 0
MAX_SCORE = 100


def analyze_loan_history(loans: Sequence[Loan], now: datetime) -> LoanHistoryFactors:
    """
    Summarize a customer's loan history as of `now`.

    - Expired term: end_date set and already in the past. This says nothing
      about whether the loan was repaid; emi_paid_on_time is not consulted.
    - Current exposure: principal of loans with no end_date or an end_date
      still in the future.

    A loan ending exactly at `now` counts towards neither.
    """
    expired = sum(1 for loan in loans if loan.end_date is not None and loan.end_date < now)
    volume = sum(loan.principal for loan in loans)
    exposure = sum(
        loan.principal
        for loan in loans
        if loan.end_date is None or loan.end_date > now
    )

    return LoanHistoryFactors(
        loans_with_expired_term=expired,
        loans_taken=len(loans),
        volume=volume,
        current_exposure=exposure,
    )


def is_overleveraged(factors: LoanHistoryFactors, monthly_salary: float) -> bool:
    """Active principal above half the monthly salary"""
    return factors.current_exposure > OVERLEVERAGE_SALARY_RATIO * monthly_salary


def calculate_credit_score(factors: LoanHistoryFactors, monthly_salary: float) -> int:
    """
    Calculate credit score from 0 (reject) to 100.

    Scoring:
    - +5 per loan whose term has elapsed
    - +10 per loan ever taken
    - +1 per 1000 of total principal borrowed
    - Overleveraged override: forced to 0, discarding all of the above

    Result is clamped to [0, 100] and rounded half-up.
    """
    if is_overleveraged(factors, monthly_salary):
        return MIN_SCORE

    score = 0.0
    if factors.loans_with_expired_term > 0:
        score += factors.loans_with_expired_term * EXPIRED_TERM_POINTS
    if factors.loans_taken > 0:
        score += factors.loans_taken * LOAN_TAKEN_POINTS
    if factors.volume > 0:
        score += factors.volume / VOLUME_DIVISOR

    score = max(MIN_SCORE, min(MAX_SCORE, score))
    return round_half_up(score)


def score_customer(customer: Customer, loans: Sequence[Loan], now: datetime) -> int:
    """Main entry point: score a customer against their full loan history"""
    factors = analyze_loan_history(loans, now)
    return calculate_credit_score(factors, customer.monthly_salary)
