"""Prometheus metrics for monitoring approval rates, rate corrections, and repayments"""

from prometheus_client import Counter, Histogram

# Decision metrics
decision_counter = Counter(
    "credit_decision_total",
    "Total eligibility decisions made",
    ["outcome"],  # approved | declined
)

decision_tier_counter = Counter(
    "credit_decision_tier",
    "Eligibility decisions by policy tier",
    ["tier"],  # prime | standard | subprime | declined
)

rate_correction_counter = Counter(
    "credit_rate_corrections_total",
    "Approved decisions where the requested rate was raised",
)

# Lifecycle metrics
loans_created_counter = Counter(
    "credit_loans_created_total",
    "Loans persisted after approval",
)

payment_counter = Counter(
    "credit_payments_total",
    "Make-payment calls",
    ["result"],  # recorded | skipped
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(approved: bool, tier: str, requested_rate: float, corrected_rate: float) -> None:
    """Record decision metrics for monitoring approval rates and tier distribution"""
    outcome = "approved" if approved else "declined"
    decision_counter.labels(outcome=outcome).inc()
    decision_tier_counter.labels(tier=tier).inc()

    if approved and corrected_rate > requested_rate:
        rate_correction_counter.inc()


def record_payment(recorded: bool) -> None:
    payment_counter.labels(result="recorded" if recorded else "skipped").inc()
