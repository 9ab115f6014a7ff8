"""Loan endpoints - eligibility, creation, payments and statements"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from credit_engine.api.routes.schemas import (
    CreateLoanResponse,
    EligibilityResponse,
    LoanCustomerSchema,
    LoanDetailResponse,
    LoanRecordSchema,
    LoanRequestBody,
    PaymentResponse,
    ScheduleItem,
    ScheduleResponse,
    StatementResponse,
)
from credit_engine.api.dependencies import get_lifecycle_manager, get_request_id
from credit_engine.infrastructure.database.session import get_db
from credit_engine.domain.exceptions import NotFoundError, ValidationError
from credit_engine.domain.lifecycle import LoanLifecycleManager
from credit_engine.domain.models import LoanRequest, LoanStatement
from credit_engine.infrastructure.observability.metrics import (
    loans_created_counter,
    record_decision,
    record_payment,
)
from credit_engine.infrastructure.observability.logging import log_eligibility
from credit_engine.utils.numbers import round_currency

router = APIRouter()


def _to_domain_request(body: LoanRequestBody) -> LoanRequest:
    return LoanRequest(
        customer_id=body.customer_id,
        principal=body.loan_amount,
        interest_rate=body.interest_rate,
        tenure=body.tenure,
    )


def _statement_response(statement: LoanStatement) -> StatementResponse:
    loan = statement.loan
    return StatementResponse(
        customer_id=loan.customer_id,
        loan_id=loan.id,
        principal=loan.principal,
        interest_rate=loan.interest_rate,
        amount_paid=statement.amount_paid,
        monthly_installment=loan.monthly_payment,
        repayments_left=statement.repayments_left,
        status=statement.status.value,
    )


@router.post("/check-eligibility", response_model=EligibilityResponse)
def check_eligibility(
    request_body: LoanRequestBody,
    request: Request,
    manager: LoanLifecycleManager = Depends(get_lifecycle_manager),
):
    """
    Score the customer and apply the approval policy. Nothing is written.

    A declined request is still a 200 with approval=false.
    """
    request_id = get_request_id(request)

    try:
        result = manager.check_eligibility(_to_domain_request(request_body))
    except NotFoundError as e:
        logging.warning(f"Eligibility check failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

    decision = result.decision
    record_decision(decision.approval, decision.tier, result.requested_rate, decision.corrected_rate)
    log_eligibility(request_id, result.customer_id, result.score, decision.approval, decision.tier, decision.corrected_rate)

    return EligibilityResponse(
        customer_id=result.customer_id,
        approval=decision.approval,
        interest_rate=result.requested_rate,
        corrected_interest_rate=decision.corrected_rate,
        tenure=result.tenure,
        monthly_installment=round_currency(decision.monthly_installment),
    )


@router.post("/create-loan", response_model=CreateLoanResponse)
def create_loan(
    request_body: LoanRequestBody,
    request: Request,
    db: Session = Depends(get_db),
    manager: LoanLifecycleManager = Depends(get_lifecycle_manager),
):
    """
    Create a loan if the customer is eligible.

    Flow:
    1. Lock the customer row and re-run the eligibility check
    2. Persist the loan at the corrected rate if approved
    3. Commit, releasing the lock

    Returns 201 with the loan id when approved, 200 with loan_id=null when not.
    """
    request_id = get_request_id(request)

    try:
        creation = manager.create_loan(_to_domain_request(request_body))
        db.commit()
    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Loan creation failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=e.errors)
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    eligibility = creation.eligibility
    decision = eligibility.decision
    loan_id = creation.loan.id if creation.loan else None

    record_decision(decision.approval, decision.tier, eligibility.requested_rate, decision.corrected_rate)
    if creation.loan:
        loans_created_counter.inc()
    log_eligibility(
        request_id, eligibility.customer_id, eligibility.score, decision.approval,
        decision.tier, decision.corrected_rate, loan_id=loan_id,
    )

    body = CreateLoanResponse(
        loan_id=loan_id,
        customer_id=eligibility.customer_id,
        loan_approved=creation.loan is not None,
        message=creation.message,
        monthly_installment=creation.loan.monthly_payment if creation.loan else 0,
    )
    return JSONResponse(status_code=201 if creation.loan else 200, content=body.model_dump())


@router.get("/view-loan/{loan_id}", response_model=LoanDetailResponse)
def view_loan(
    loan_id: int,
    manager: LoanLifecycleManager = Depends(get_lifecycle_manager),
):
    """Loan details with the owning customer's contact summary"""
    try:
        view = manager.view_loan(loan_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    loan, customer = view.loan, view.customer
    return LoanDetailResponse(
        loan_id=loan.id,
        customer=LoanCustomerSchema(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            phone_number=customer.phone_number,
            age=customer.age,
        ) if customer else None,
        loan_amount=loan.principal,
        interest_rate=loan.interest_rate,
        monthly_installment=loan.monthly_payment,
        tenure=loan.tenure,
        emi_paid_on_time=loan.emi_paid_on_time,
        start_date=loan.start_date,
        end_date=loan.end_date,
        status=loan.status(manager.clock()).value,
    )


@router.post("/make-payment/{customer_id}/{loan_id}", response_model=PaymentResponse)
def make_payment(
    customer_id: int,
    loan_id: int,
    request: Request,
    db: Session = Depends(get_db),
    manager: LoanLifecycleManager = Depends(get_lifecycle_manager),
):
    """Count one on-time EMI against the loan"""
    request_id = get_request_id(request)

    try:
        payment = manager.record_payment(customer_id, loan_id)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Payment failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    record_payment(payment.recorded)
    return PaymentResponse(
        loan_id=payment.loan.id,
        customer_id=customer_id,
        emi_paid_on_time=payment.loan.emi_paid_on_time,
        payment_recorded=payment.recorded,
        message="Payment recorded." if payment.recorded else "Payment not recorded: no prior on-time EMIs on this loan.",
    )


@router.get("/view-statement/{customer_id}/{loan_id}", response_model=StatementResponse)
def view_statement(
    customer_id: int,
    loan_id: int,
    manager: LoanLifecycleManager = Depends(get_lifecycle_manager),
):
    """Repayment progress of a loan"""
    try:
        statement = manager.view_statement(customer_id, loan_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _statement_response(statement)


@router.get("/view-loans/{customer_id}", response_model=List[StatementResponse])
def view_loans(
    customer_id: int,
    manager: LoanLifecycleManager = Depends(get_lifecycle_manager),
):
    """Repayment progress of every loan the customer holds"""
    try:
        statements = manager.view_customer_loans(customer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [_statement_response(s) for s in statements]


@router.get("/view-schedule/{loan_id}", response_model=ScheduleResponse)
def view_schedule(
    loan_id: int,
    manager: LoanLifecycleManager = Depends(get_lifecycle_manager),
):
    """Monthly amortization schedule of a loan"""
    try:
        schedule = manager.view_schedule(loan_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return ScheduleResponse(
        loan_id=loan_id,
        installments=[
            ScheduleItem(
                number=item.number,
                due_date=item.due_date,
                amount=item.amount,
                interest=item.interest,
                principal=item.principal,
                balance=item.balance,
            )
            for item in schedule
        ],
    )


@router.get("/loan", response_model=List[LoanRecordSchema])
def list_loans(manager: LoanLifecycleManager = Depends(get_lifecycle_manager)):
    """Return every loan record"""
    return [
        LoanRecordSchema(
            id=loan.id,
            customer_id=loan.customer_id,
            loan_amount=loan.principal,
            interest_rate=loan.interest_rate,
            tenure=loan.tenure,
            monthly_payment=loan.monthly_payment,
            emi_paid_on_time=loan.emi_paid_on_time,
            start_date=loan.start_date,
            end_date=loan.end_date,
        )
        for loan in manager.list_loans()
    ]
