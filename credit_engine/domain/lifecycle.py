"""Loan lifecycle - eligibility, creation, repayment progress and read views"""

import logging
import math
from datetime import datetime
from typing import Callable, Dict, List

from credit_engine.domain.approval import decide
from credit_engine.domain.exceptions import NotFoundError, ValidationError
from credit_engine.domain.installments import generate_repayment_schedule
from credit_engine.domain.models import (
    Customer,
    EligibilityResult,
    Loan,
    LoanCreation,
    LoanRequest,
    LoanStatement,
    LoanView,
    PaymentRecord,
    ScheduledInstallment,
)
from credit_engine.domain.repositories import CustomerRepository, LoanRepository
from credit_engine.domain.scoring import score_customer
from credit_engine.utils.date_utils import add_months, utc_now
from credit_engine.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

MAX_TENURE_MONTHS = 600  # keeps end_date well inside datetime range


def validate_loan_request(request: LoanRequest) -> LoanRequest:
    """Return the request unchanged or raise ValidationError listing every bad field"""
    errors: List[Dict[str, str]] = []

    if request.principal is None or not math.isfinite(request.principal) or request.principal <= 0:
        errors.append({"field": "loan_amount", "message": "loan_amount must be a finite, positive number"})
    if request.interest_rate is None or not math.isfinite(request.interest_rate) or request.interest_rate < 0:
        errors.append({"field": "interest_rate", "message": "interest_rate must be a finite, non-negative number"})
    if isinstance(request.tenure, bool) or not isinstance(request.tenure, int) or request.tenure <= 0:
        errors.append({"field": "tenure", "message": "tenure must be a positive whole number of months"})
    elif request.tenure > MAX_TENURE_MONTHS:
        errors.append({"field": "tenure", "message": f"tenure must not exceed {MAX_TENURE_MONTHS} months"})

    if errors:
        raise ValidationError(errors)
    return request


def _rejection_message(score: int) -> str:
    if score == 0:
        return "Loan not approved: credit score is 0 (no qualifying history or current loans exceed 50% of monthly salary)."
    return "Loan not approved: credit score too low."


class LoanLifecycleManager:
    """Orchestrates scoring and the approval policy over the customer and loan stores"""

    def __init__(
        self,
        customers: CustomerRepository,
        loans: LoanRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.customers = customers
        self.loans = loans
        self.clock = clock

    def _require_customer(self, customer_id: int) -> Customer:
        customer = self.customers.get_by_id(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def _require_loan(self, loan_id: int) -> Loan:
        loan = self.loans.get_by_id(loan_id)
        if loan is None:
            raise NotFoundError("Loan", loan_id)
        return loan

    def _evaluate(self, customer: Customer, request: LoanRequest, now: datetime) -> EligibilityResult:
        history = self.loans.list_by_customer_id(customer.id)
        score = score_customer(customer, history, now)
        decision = decide(score, request.interest_rate, request.tenure, request.principal)
        if not math.isfinite(decision.monthly_installment):
            raise ValidationError.for_field("loan_amount", "monthly installment is too large to represent")

        return EligibilityResult(
            customer_id=customer.id,
            requested_rate=request.interest_rate,
            tenure=request.tenure,
            score=score,
            decision=decision,
        )

    def check_eligibility(self, request: LoanRequest) -> EligibilityResult:
        """Score the customer and apply the approval policy without writing anything"""
        request = validate_loan_request(request)
        customer = self._require_customer(request.customer_id)
        return self._evaluate(customer, request, self.clock())

    def create_loan(self, request: LoanRequest) -> LoanCreation:
        """
        Re-run the eligibility check and persist a loan only when approved.

        The customer is read with get_for_update so the exposure read and the
        insert happen under the store's lock for that customer.
        """
        request = validate_loan_request(request)
        customer = self.customers.get_for_update(request.customer_id)
        if customer is None:
            raise NotFoundError("Customer", request.customer_id)

        now = self.clock()
        eligibility = self._evaluate(customer, request, now)
        decision = eligibility.decision

        if not decision.approval:
            logger.info(
                "Loan not approved for customer %d (score=%d)",
                customer.id,
                eligibility.score,
            )
            return LoanCreation(eligibility=eligibility, loan=None, message=_rejection_message(eligibility.score))

        loan = self.loans.insert(
            customer_id=customer.id,
            principal=request.principal,
            interest_rate=decision.corrected_rate,
            tenure=request.tenure,
            monthly_payment=round_half_up(decision.monthly_installment),
            emi_paid_on_time=0,
            start_date=now,
            end_date=add_months(now, request.tenure),
        )
        logger.info("Loan %d created for customer %d", loan.id, customer.id)
        return LoanCreation(eligibility=eligibility, loan=loan, message="Loan approved and created.")

    def record_payment(self, customer_id: int, loan_id: int) -> PaymentRecord:
        """
        Count one on-time EMI against the loan.

        The increment only happens when the stored counter is already non-zero,
        so a loan at 0 never records its first payment. Existing behavior,
        kept as is.
        """
        loan = self._require_loan(loan_id)
        self._require_customer(customer_id)

        if not loan.emi_paid_on_time:
            logger.warning("Payment for loan %d not recorded: emi_paid_on_time is 0", loan.id)
            return PaymentRecord(loan=loan, recorded=False)

        updated = self.loans.update_emi_count(loan.id, loan.emi_paid_on_time + 1)
        logger.info("Recorded payment %d for loan %d", updated.emi_paid_on_time, updated.id)
        return PaymentRecord(loan=updated, recorded=True)

    def view_loan(self, loan_id: int) -> LoanView:
        loan = self._require_loan(loan_id)
        return LoanView(loan=loan, customer=self.customers.get_by_id(loan.customer_id))

    def _statement(self, loan: Loan, now: datetime) -> LoanStatement:
        return LoanStatement(
            loan=loan,
            amount_paid=loan.emi_paid_on_time * loan.monthly_payment,
            repayments_left=max(loan.tenure - loan.emi_paid_on_time, 0),
            status=loan.status(now),
        )

    def view_statement(self, customer_id: int, loan_id: int) -> LoanStatement:
        """
        Statement for a loan in a customer's context.

        Only checks that the customer exists, not that the loan belongs to
        them. Existing behavior, kept as is.
        """
        self._require_customer(customer_id)
        loan = self._require_loan(loan_id)
        return self._statement(loan, self.clock())

    def view_customer_loans(self, customer_id: int) -> List[LoanStatement]:
        self._require_customer(customer_id)
        now = self.clock()
        return [self._statement(loan, now) for loan in self.loans.list_by_customer_id(customer_id)]

    def view_schedule(self, loan_id: int) -> List[ScheduledInstallment]:
        loan = self._require_loan(loan_id)
        start = loan.start_date or self.clock()
        return generate_repayment_schedule(loan.principal, loan.interest_rate, loan.tenure, start.date())

    def list_customers(self) -> List[Customer]:
        return self.customers.list_all()

    def list_loans(self) -> List[Loan]:
        return self.loans.list_all()
