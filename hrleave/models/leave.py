from sqlalchemy import Column, Integer, String, Date, Float, DateTime
from sqlalchemy.sql import func
from hrleave.database import Base
import enum

class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class Leave(Base):
    __tablename__ = "leaves"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String, index=True, nullable=False)
    leave_type = Column(String, index=True, nullable=True) # e.g., "Annual", "Sick"
    start_date = Column(Date, index=True)
    end_date = Column(Date)
    days_taken = Column(Float)
    reason = Column(String, nullable=True)
    status = Column(String, default=LeaveStatus.PENDING.value) # Using String to store enum value for simplicity with SQLite
    created_at = Column(DateTime(timezone=True), server_default=func.now())
