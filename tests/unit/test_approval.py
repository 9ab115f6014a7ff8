"""Unit tests for the tiered approval policy"""

import pytest
from credit_engine.domain.approval import decide, determine_tier
from credit_engine.domain.installments import calculate_monthly_installment


def test_zero_score_rejects():
    decision = decide(0, requested_rate=14, tenure=12, principal=100000)

    assert decision.approval is False
    assert decision.corrected_rate == 0
    assert decision.monthly_installment == 0
    assert decision.tier == "declined"


@pytest.mark.parametrize("score", [51, 75, 100])
def test_prime_keeps_requested_rate(score: int):
    decision = decide(score, requested_rate=8, tenure=12, principal=100000)

    assert decision.approval is True
    assert decision.corrected_rate == 8
    assert decision.monthly_installment == calculate_monthly_installment(100000, 8, 12)
    assert decision.tier == "prime"


@pytest.mark.parametrize(
    "score,expected",
    [
        (51, (True, None, "prime")),
        (50, (True, 12.0, "standard")),
        (31, (True, 12.0, "standard")),
        (30, (True, 16.0, "subprime")),
        (11, (True, 16.0, "subprime")),
        (10, (False, None, "declined")),
    ],
)
def test_tier_bands_are_closed_at_the_top(score: int, expected: tuple):
    assert determine_tier(score) == expected


def test_score_50_above_floor_keeps_requested_rate():
    decision = decide(50, requested_rate=14, tenure=12, principal=100000)

    assert decision.approval is True
    assert decision.corrected_rate == 14


def test_score_50_below_floor_raised_to_12():
    decision = decide(50, requested_rate=8, tenure=12, principal=100000)

    assert decision.approval is True
    assert decision.corrected_rate == 12
    assert decision.monthly_installment == pytest.approx(8884.88, abs=0.01)
    assert decision.tier == "standard"


def test_score_31_raised_to_12():
    assert decide(31, requested_rate=10, tenure=12, principal=100000).corrected_rate == 12


def test_score_30_raised_to_16():
    decision = decide(30, requested_rate=10, tenure=12, principal=100000)

    assert decision.approval is True
    assert decision.corrected_rate == 16
    assert decision.monthly_installment == calculate_monthly_installment(100000, 16, 12)
    assert decision.tier == "subprime"


def test_score_30_above_floor_keeps_requested_rate():
    assert decide(30, requested_rate=20, tenure=12, principal=100000).corrected_rate == 20


def test_score_11_approves_subprime():
    assert decide(11, requested_rate=10, tenure=12, principal=100000).approval is True


@pytest.mark.parametrize("score", [1, 5, 10])
def test_low_score_rejects(score: int):
    decision = decide(score, requested_rate=20, tenure=12, principal=100000)

    assert decision.approval is False
    assert decision.corrected_rate == 0
    assert decision.monthly_installment == 0


def test_tiers_cover_every_score():
    """Exactly one tier per score; approval iff score > 10"""
    for score in range(0, 101):
        approved, min_rate, tier = determine_tier(score)

        assert approved is (score > 10)
        assert tier in {"prime", "standard", "subprime", "declined"}
        if tier == "standard":
            assert min_rate == 12
        elif tier == "subprime":
            assert min_rate == 16
        else:
            assert min_rate is None


def test_zero_rate_approval_uses_even_split():
    decision = decide(80, requested_rate=0, tenure=10, principal=100000)

    assert decision.approval is True
    assert decision.monthly_installment == 10000
