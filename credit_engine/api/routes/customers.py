"""POST /register, GET /customer - customer onboarding endpoints"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from credit_engine.api.routes.schemas import CustomerRecordSchema, RegisterRequest, RegisterResponse
from credit_engine.api.dependencies import get_customer_repository, get_lifecycle_manager, get_request_id
from credit_engine.infrastructure.database.session import get_db
from credit_engine.infrastructure.database.repositories import SqlCustomerRepository
from credit_engine.domain.exceptions import ValidationError
from credit_engine.domain.lifecycle import LoanLifecycleManager
from credit_engine.domain.models import CustomerRegistration
from credit_engine.domain.onboarding import register_customer

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    request_body: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
    customers: SqlCustomerRepository = Depends(get_customer_repository),
):
    """
    Onboard a customer.

    approved_limit = 36 * monthly income rounded to the nearest lakh,
    computed once here and never updated.
    """
    request_id = get_request_id(request)
    registration = CustomerRegistration(
        first_name=request_body.first_name,
        last_name=request_body.last_name,
        age=request_body.age,
        phone_number=request_body.phone_number,
        monthly_salary=request_body.monthly_income,
    )

    try:
        customer = register_customer(customers, registration)
        db.commit()
    except ValidationError as e:
        db.rollback()
        logging.warning(f"Registration rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=e.errors)
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return RegisterResponse(
        customer_id=customer.id,
        name=customer.full_name,
        age=customer.age,
        monthly_income=customer.monthly_salary,
        approved_limit=customer.approved_limit,
        phone_number=customer.phone_number,
    )


@router.get("/customer", response_model=List[CustomerRecordSchema])
def list_customers(manager: LoanLifecycleManager = Depends(get_lifecycle_manager)):
    """Return every customer record"""
    return [
        CustomerRecordSchema(
            id=c.id,
            first_name=c.first_name,
            last_name=c.last_name,
            age=c.age,
            phone_number=c.phone_number,
            monthly_salary=c.monthly_salary,
            approved_limit=c.approved_limit,
        )
        for c in manager.list_customers()
    ]
