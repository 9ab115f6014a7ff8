"""Customer onboarding - salary-derived approved limit"""

import logging
import math
from typing import Dict, List

from credit_engine.domain.exceptions import ValidationError
from credit_engine.domain.models import Customer, CustomerRegistration
from credit_engine.domain.repositories import CustomerRepository
from credit_engine.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

LIMIT_ROUNDING_UNIT = 100_000  # one lakh
LIMIT_SALARY_MULTIPLE = 36


def calculate_approved_limit(monthly_salary: float) -> int:
    """
    Approved limit = salary rounded (half-up) to the nearest lakh, times 36.

    Example:
        150000 -> round(1.5) = 2 -> 2 * 100000 * 36 = 7,200,000
        120000 -> round(1.2) = 1 -> 3,600,000
    """
    lakhs = round_half_up(monthly_salary / LIMIT_ROUNDING_UNIT)
    return lakhs * LIMIT_ROUNDING_UNIT * LIMIT_SALARY_MULTIPLE


def validate_registration(registration: CustomerRegistration) -> CustomerRegistration:
    """Return the registration unchanged or raise ValidationError listing every bad field"""
    errors: List[Dict[str, str]] = []

    if registration.monthly_salary is None:
        errors.append({"field": "monthly_income", "message": "monthly_income is required"})
    elif not math.isfinite(registration.monthly_salary) or registration.monthly_salary <= 0:
        errors.append({"field": "monthly_income", "message": "monthly_income must be a finite, positive number"})

    if registration.age is not None and registration.age < 0:
        errors.append({"field": "age", "message": "age must not be negative"})

    if errors:
        raise ValidationError(errors)
    return registration


def register_customer(customers: CustomerRepository, registration: CustomerRegistration) -> Customer:
    """Validate, derive the approved limit once, and insert the customer"""
    registration = validate_registration(registration)
    approved_limit = calculate_approved_limit(registration.monthly_salary)

    customer = customers.insert(
        first_name=registration.first_name,
        last_name=registration.last_name,
        age=registration.age,
        phone_number=registration.phone_number,
        monthly_salary=registration.monthly_salary,
        approved_limit=approved_limit,
    )
    logger.info(
        "Registered customer %s (ID: %d) with approved_limit=%d",
        customer.full_name,
        customer.id,
        approved_limit,
    )
    return customer
