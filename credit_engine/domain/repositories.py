"""Storage contracts consumed by the underwriting engine"""

from datetime import datetime
from typing import List, Optional, Protocol

from credit_engine.domain.models import Customer, Loan


class CustomerRepository(Protocol):
    """Durable record of customers"""

    def get_by_id(self, customer_id: int) -> Optional[Customer]:
        ...

    def get_for_update(self, customer_id: int) -> Optional[Customer]:
        """
        Read a customer and hold it until the current unit of work ends.

        Loan creation reads the customer's exposure and then inserts a loan.
        Implementations must serialize concurrent callers for the same customer
        between this read and the commit, so two requests can't both pass the
        overleveraging check against the same stale exposure.
        """
        ...

    def insert(
        self,
        first_name: str,
        last_name: str,
        age: Optional[int],
        phone_number: Optional[str],
        monthly_salary: float,
        approved_limit: int,
    ) -> Customer:
        ...

    def list_all(self) -> List[Customer]:
        ...


class LoanRepository(Protocol):
    """Durable record of loans"""

    def get_by_id(self, loan_id: int) -> Optional[Loan]:
        ...

    def list_by_customer_id(self, customer_id: int) -> List[Loan]:
        ...

    def insert(
        self,
        customer_id: int,
        principal: float,
        interest_rate: float,
        tenure: int,
        monthly_payment: int,
        emi_paid_on_time: int,
        start_date: datetime,
        end_date: datetime,
    ) -> Loan:
        ...

    def update_emi_count(self, loan_id: int, new_count: int) -> Loan:
        ...

    def list_all(self) -> List[Loan]:
        ...
