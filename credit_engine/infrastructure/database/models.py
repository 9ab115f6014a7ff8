"""SQLAlchemy ORM models for customers and loans"""

from sqlalchemy import Column, BigInteger, Float, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class CustomerRecord(Base):
    """Onboarded customer"""

    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    age = Column(Integer, nullable=True)
    phone_number = Column(Text, nullable=True)
    monthly_salary = Column(Float, nullable=False)
    approved_limit = Column(BigInteger, nullable=False)

    loans = relationship("LoanRecord", back_populates="customer")


class LoanRecord(Base):
    """Loan issued through the approval workflow"""

    __tablename__ = "loan"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    loan_amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)
    tenure = Column(Integer, nullable=False)
    monthly_payment = Column(BigInteger, nullable=False)
    emi_paid_on_time = Column(Integer, nullable=False, default=0)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    customer = relationship("CustomerRecord", back_populates="loans")
