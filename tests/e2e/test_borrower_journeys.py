"""
E2E tests walking borrowers through the full HTTP surface.

Borrowers:
- returning borrower: finished loans on file, approved at a corrected rate,
  then blocked from a second loan while the first is still running
- first-time borrower: no history, declined, nothing written
"""

from datetime import datetime, timezone
from fastapi.testclient import TestClient


def test_returning_borrower(client: TestClient, db, seed_loan):
    """
    returning borrower: two finished loans, salary 100000
    Expected: approved at 12% instead of 10%, then overleveraged on a second request
    """
    customer_id = client.post(
        "/register",
        json={"first_name": "Ravi", "last_name": "Kumar", "age": 41, "monthly_income": 100000, "phone_number": "9000000001"},
    ).json()["customer_id"]
    seed_loan(customer_id, 10000, datetime(2022, 1, 1, tzinfo=timezone.utc), datetime(2023, 1, 1, tzinfo=timezone.utc))
    seed_loan(customer_id, 10000, datetime(2023, 1, 1, tzinfo=timezone.utc), datetime(2024, 1, 1, tzinfo=timezone.utc))
    db.commit()

    request = {"customer_id": customer_id, "loan_amount": 100000, "interest_rate": 10, "tenure": 12}

    eligibility = client.post("/check-eligibility", json=request).json()
    assert eligibility["approval"] is True
    assert eligibility["corrected_interest_rate"] == 12

    created = client.post("/create-loan", json=request)
    assert created.status_code == 201
    loan_id = created.json()["loan_id"]

    statement = client.get(f"/view-statement/{customer_id}/{loan_id}").json()
    assert statement["status"] == "active"
    assert statement["repayments_left"] == 12
    assert statement["amount_paid"] == 0

    # 100000 of active principal is now above half the salary
    again = client.post("/check-eligibility", json=request).json()
    assert again["approval"] is False
    assert again["corrected_interest_rate"] == 0

    blocked = client.post("/create-loan", json=request)
    assert blocked.status_code == 200
    assert blocked.json()["loan_id"] is None
    assert len(client.get(f"/view-loans/{customer_id}").json()) == 3


def test_first_time_borrower_declined(client: TestClient):
    """
    first-time borrower: registered, no loan history
    Expected: score 0, decline, no loan persisted
    """
    registered = client.post(
        "/register",
        json={"first_name": "Meera", "last_name": "Iyer", "age": 25, "monthly_income": 45000, "phone_number": "9000000002"},
    )
    assert registered.status_code == 201
    assert registered.json()["approved_limit"] == 0  # 0.45 lakh rounds down

    customer_id = registered.json()["customer_id"]
    request = {"customer_id": customer_id, "loan_amount": 20000, "interest_rate": 18, "tenure": 6}

    eligibility = client.post("/check-eligibility", json=request).json()
    assert eligibility["approval"] is False
    assert eligibility["monthly_installment"] == 0

    created = client.post("/create-loan", json=request).json()
    assert created["loan_approved"] is False
    assert client.get(f"/view-loans/{customer_id}").json() == []
