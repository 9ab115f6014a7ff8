"""Data access layer for customers and loans"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from credit_engine.infrastructure.database.models import CustomerRecord, LoanRecord
from credit_engine.domain.exceptions import NotFoundError
from credit_engine.domain.models import Customer, Loan
from credit_engine.utils.date_utils import ensure_utc


def _to_customer(row: CustomerRecord) -> Customer:
    return Customer(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        age=row.age,
        phone_number=row.phone_number,
        monthly_salary=row.monthly_salary,
        approved_limit=row.approved_limit,
    )


def _to_loan(row: LoanRecord) -> Loan:
    return Loan(
        id=row.id,
        customer_id=row.customer_id,
        principal=row.loan_amount,
        interest_rate=row.interest_rate,
        tenure=row.tenure,
        monthly_payment=row.monthly_payment,
        emi_paid_on_time=row.emi_paid_on_time,
        start_date=ensure_utc(row.start_date),
        end_date=ensure_utc(row.end_date),
    )


class SqlCustomerRepository:
    """Repository for customers"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, customer_id: int) -> Optional[Customer]:
        row = self.db.get(CustomerRecord, customer_id)
        return _to_customer(row) if row else None

    def get_for_update(self, customer_id: int) -> Optional[Customer]:
        """Row lock held until commit/rollback (FOR UPDATE; a no-op on SQLite)"""
        row = (
            self.db.query(CustomerRecord)
            .filter(CustomerRecord.id == customer_id)
            .with_for_update()
            .first()
        )
        return _to_customer(row) if row else None

    def insert(
        self,
        first_name: str,
        last_name: str,
        age: Optional[int],
        phone_number: Optional[str],
        monthly_salary: float,
        approved_limit: int,
    ) -> Customer:
        """Persist customer to database"""
        row = CustomerRecord(
            first_name=first_name,
            last_name=last_name,
            age=age,
            phone_number=phone_number,
            monthly_salary=monthly_salary,
            approved_limit=approved_limit,
        )
        self.db.add(row)
        self.db.flush()  # Get ID without committing
        return _to_customer(row)

    def list_all(self) -> List[Customer]:
        return [_to_customer(row) for row in self.db.query(CustomerRecord).order_by(CustomerRecord.id).all()]


class SqlLoanRepository:
    """Repository for loans"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, loan_id: int) -> Optional[Loan]:
        row = self.db.get(LoanRecord, loan_id)
        return _to_loan(row) if row else None

    def list_by_customer_id(self, customer_id: int) -> List[Loan]:
        """Fetch a customer's full loan history"""
        rows = (
            self.db.query(LoanRecord)
            .filter(LoanRecord.customer_id == customer_id)
            .order_by(LoanRecord.id)
            .all()
        )
        return [_to_loan(row) for row in rows]

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
        """Persist loan to database"""
        row = LoanRecord(
            customer_id=customer_id,
            loan_amount=principal,
            interest_rate=interest_rate,
            tenure=tenure,
            monthly_payment=monthly_payment,
            emi_paid_on_time=emi_paid_on_time,
            start_date=start_date,
            end_date=end_date,
        )
        self.db.add(row)
        self.db.flush()
        return _to_loan(row)

    def update_emi_count(self, loan_id: int, new_count: int) -> Loan:
        row = self.db.get(LoanRecord, loan_id)
        if row is None:
            raise NotFoundError("Loan", loan_id)
        row.emi_paid_on_time = new_count
        self.db.flush()
        return _to_loan(row)

    def list_all(self) -> List[Loan]:
        return [_to_loan(row) for row in self.db.query(LoanRecord).order_by(LoanRecord.id).all()]
