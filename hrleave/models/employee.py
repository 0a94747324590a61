import uuid
from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.sql import func
from hrleave.database import Base

class Employee(Base):
    __tablename__ = "employees"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=True)
    years_of_service = Column(Integer, default=0)
    # Denormalized cache written by the leave balance calculator.
    # leave_balance holds the remaining balance, annual_leave_balance the in-lieu balance.
    leave_balance = Column(Float, nullable=True)
    annual_leave_balance = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
