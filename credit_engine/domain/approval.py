"""Tiered approval policy - credit score to decision and corrected rate"""

from credit_engine.domain.installments import calculate_monthly_installment
from credit_engine.domain.models import ApprovalDecision

STANDARD_MIN_RATE = 12.0
SUBPRIME_MIN_RATE = 16.0


def determine_tier(score: int) -> tuple[bool, float | None, str]:
    """
    Map credit score to an approval tier.

    Score bands:
    - 0:        Decline (overleveraged or no qualifying history)
    - 51+:      Approve at the requested rate
    - 31 - 50:  Approve at no less than 12%
    - 11 - 30:  Approve at no less than 16%
    - 1 - 10:   Decline

    Bands are closed at the top, so exactly 50 gets the 12% floor and
    exactly 30 the 16% floor.

    Returns: (approved, minimum_rate or None when uncapped, tier)
    """
    if score == 0:
        return False, None, "declined"
    elif score > 50:
        return True, None, "prime"
    elif score > 30:
        return True, STANDARD_MIN_RATE, "standard"
    elif score > 10:
        return True, SUBPRIME_MIN_RATE, "subprime"
    else:
        return False, None, "declined"


def decide(score: int, requested_rate: float, tenure: int, principal: float) -> ApprovalDecision:
    """
    Decide on a loan request given the customer's credit score.

    Approved requests get the installment computed at the corrected rate.
    Rejections are ordinary results with rate and installment of 0.
    """
    approved, min_rate, tier = determine_tier(score)
    if not approved:
        return ApprovalDecision(approval=False, corrected_rate=0, monthly_installment=0, tier=tier)

    corrected_rate = requested_rate if min_rate is None else max(requested_rate, min_rate)
    installment = calculate_monthly_installment(principal, corrected_rate, tenure)

    return ApprovalDecision(
        approval=True,
        corrected_rate=corrected_rate,
        monthly_installment=installment,
        tier=tier,
    )
