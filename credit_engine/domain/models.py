"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class LoanStatus(str, Enum):
    """Derived from end_date at read time, never stored"""

    ACTIVE = "active"
    CLOSED = "closed"


@dataclass
class Customer:
    """Onboarded borrower"""

    id: int
    first_name: str
    last_name: str
    age: Optional[int]
    phone_number: Optional[str]
    monthly_salary: float
    approved_limit: int

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Loan:
    """Loan record; only emi_paid_on_time changes after creation"""

    id: int
    customer_id: int
    principal: float
    interest_rate: float
    tenure: int
    monthly_payment: int
    emi_paid_on_time: int
    start_date: Optional[datetime]
    end_date: Optional[datetime]

    def status(self, now: datetime) -> LoanStatus:
        if self.end_date is None or now < self.end_date:
            return LoanStatus.ACTIVE
        return LoanStatus.CLOSED


@dataclass
class CustomerRegistration:
    """Registration input before validation"""

    first_name: str
    last_name: str
    age: Optional[int] = None
    phone_number: Optional[str] = None
    monthly_salary: Optional[float] = None


@dataclass
class LoanRequest:
    """Eligibility / create-loan input"""

    customer_id: int
    principal: float
    interest_rate: float
    tenure: int


@dataclass
class LoanHistoryFactors:
    """Aggregates over a customer's loan history used for scoring"""

    loans_with_expired_term: int
    loans_taken: int
    volume: float
    current_exposure: float


@dataclass
class ApprovalDecision:
    """Output of the approval policy"""

    approval: bool
    corrected_rate: float
    monthly_installment: float
    tier: str


@dataclass
class EligibilityResult:
    """Decision for a specific customer and request"""

    customer_id: int
    requested_rate: float
    tenure: int
    score: int
    decision: ApprovalDecision


@dataclass
class LoanCreation:
    """Result of a create-loan attempt; loan is None when rejected"""

    eligibility: EligibilityResult
    loan: Optional[Loan]
    message: str


@dataclass
class PaymentRecord:
    """Result of a make-payment call"""

    loan: Loan
    recorded: bool


@dataclass
class LoanView:
    """Loan snapshot together with its owning customer"""

    loan: Loan
    customer: Optional[Customer]


@dataclass
class LoanStatement:
    """Repayment progress of a single loan"""

    loan: Loan
    amount_paid: int
    repayments_left: int
    status: LoanStatus


@dataclass
class ScheduledInstallment:
    """Single payment in an amortization schedule"""

    number: int
    due_date: date
    amount: float
    interest: float
    principal: float
    balance: float
