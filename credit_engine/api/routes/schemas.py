"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional

from credit_engine.domain.lifecycle import MAX_TENURE_MONTHS


class RegisterRequest(BaseModel):
    """Request body for POST /register"""

    first_name: str = Field(..., min_length=1)
    last_name: str = ""
    age: Optional[int] = None
    # Optional here so a missing income reaches onboarding validation and gets a 400 with detail
    monthly_income: Optional[float] = Field(None, allow_inf_nan=False, description="Monthly salary")
    phone_number: Optional[str] = None


class RegisterResponse(BaseModel):
    """Response for POST /register"""

    customer_id: int
    name: str
    age: Optional[int]
    monthly_income: float
    approved_limit: int
    phone_number: Optional[str]


class LoanRequestBody(BaseModel):
    """Request body for POST /check-eligibility and POST /create-loan"""

    customer_id: int
    loan_amount: float = Field(..., gt=0, allow_inf_nan=False, description="Requested principal")
    interest_rate: float = Field(..., ge=0, allow_inf_nan=False, description="Requested annual interest rate, percent")
    tenure: int = Field(..., gt=0, le=MAX_TENURE_MONTHS, description="Tenure in months")


class EligibilityResponse(BaseModel):
    """Response for POST /check-eligibility"""

    customer_id: int
    approval: bool
    interest_rate: float
    corrected_interest_rate: float
    tenure: int
    monthly_installment: float


class CreateLoanResponse(BaseModel):
    """Response for POST /create-loan"""

    loan_id: Optional[int] = None
    customer_id: int
    loan_approved: bool
    message: str
    monthly_installment: float


class LoanCustomerSchema(BaseModel):
    """Customer summary nested in a loan view"""

    id: int
    first_name: str
    last_name: str
    phone_number: Optional[str]
    age: Optional[int]


class LoanDetailResponse(BaseModel):
    """Response for GET /view-loan/{loan_id}"""

    loan_id: int
    customer: Optional[LoanCustomerSchema]
    loan_amount: float
    interest_rate: float
    monthly_installment: int
    tenure: int
    emi_paid_on_time: int
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    status: str


class PaymentResponse(BaseModel):
    """Response for POST /make-payment/{customer_id}/{loan_id}"""

    loan_id: int
    customer_id: int
    emi_paid_on_time: int
    payment_recorded: bool
    message: str


class StatementResponse(BaseModel):
    """Response item for GET /view-statement and GET /view-loans"""

    customer_id: int
    loan_id: int
    principal: float
    interest_rate: float
    amount_paid: int
    monthly_installment: int
    repayments_left: int
    status: str


class ScheduleItem(BaseModel):
    """Single installment in an amortization schedule"""

    number: int
    due_date: date
    amount: float
    interest: float
    principal: float
    balance: float


class ScheduleResponse(BaseModel):
    """Response for GET /view-schedule/{loan_id}"""

    loan_id: int
    installments: List[ScheduleItem]


class CustomerRecordSchema(BaseModel):
    """Row of GET /customer"""

    id: int
    first_name: str
    last_name: str
    age: Optional[int]
    phone_number: Optional[str]
    monthly_salary: float
    approved_limit: int


class LoanRecordSchema(BaseModel):
    """Row of GET /loan"""

    id: int
    customer_id: int
    loan_amount: float
    interest_rate: float
    tenure: int
    monthly_payment: int
    emi_paid_on_time: int
    start_date: Optional[datetime]
    end_date: Optional[datetime]
