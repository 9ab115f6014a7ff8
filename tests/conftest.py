"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_engine.api.main import create_app
from credit_engine.api.dependencies import get_clock
from credit_engine.domain.lifecycle import LoanLifecycleManager
from credit_engine.domain.models import Customer, Loan
from credit_engine.infrastructure.database.models import Base
from credit_engine.infrastructure.database.repositories import SqlCustomerRepository, SqlLoanRepository
from credit_engine.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed point in time for every test
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def customers(db: Session) -> SqlCustomerRepository:
    return SqlCustomerRepository(db)


@pytest.fixture
def loans(db: Session) -> SqlLoanRepository:
    return SqlLoanRepository(db)


@pytest.fixture
def manager(customers: SqlCustomerRepository, loans: SqlLoanRepository) -> LoanLifecycleManager:
    """Lifecycle manager over the test database with the clock pinned to NOW"""
    return LoanLifecycleManager(customers, loans, clock=lambda: NOW)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)
    return TestClient(app)


@pytest.fixture
def make_customer(customers: SqlCustomerRepository):
    """Insert a customer directly, bypassing onboarding"""

    def _make(monthly_salary: float = 100000, first_name: str = "Asha", last_name: str = "Rao") -> Customer:
        return customers.insert(
            first_name=first_name,
            last_name=last_name,
            age=34,
            phone_number="9876543210",
            monthly_salary=monthly_salary,
            approved_limit=3600000,
        )

    return _make


@pytest.fixture
def seed_loan(loans: SqlLoanRepository):
    """Insert historical loans, as an import of pre-existing data would"""

    def _seed(
        customer_id: int,
        principal: float,
        start_date: datetime,
        end_date: datetime,
        emi_paid_on_time: int = 0,
        tenure: int = 12,
        interest_rate: float = 10.0,
    ) -> Loan:
        return loans.insert(
            customer_id=customer_id,
            principal=principal,
            interest_rate=interest_rate,
            tenure=tenure,
            monthly_payment=round(principal / tenure),
            emi_paid_on_time=emi_paid_on_time,
            start_date=start_date,
            end_date=end_date,
        )

    return _seed
