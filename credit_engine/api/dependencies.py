"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from credit_engine.domain.lifecycle import LoanLifecycleManager
from credit_engine.infrastructure.database.repositories import SqlCustomerRepository, SqlLoanRepository
from credit_engine.infrastructure.database.session import get_db
from credit_engine.utils.date_utils import utc_now


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_clock() -> Callable[[], datetime]:
    """Provide the time source used for loan dates and active/closed status"""
    return utc_now


def get_customer_repository(db: Session = Depends(get_db)) -> SqlCustomerRepository:
    return SqlCustomerRepository(db)


def get_lifecycle_manager(
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> LoanLifecycleManager:
    """Provide a lifecycle manager bound to the request's session"""
    return LoanLifecycleManager(SqlCustomerRepository(db), SqlLoanRepository(db), clock=clock)
