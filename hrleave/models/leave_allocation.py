from sqlalchemy import Column, Integer, String, Float, UniqueConstraint
from hrleave.database import Base

class LeaveAllocation(Base):
    __tablename__ = "leave_allocations"
    __table_args__ = (
        UniqueConstraint("employee_id", "year", "type", name="unique_allocation"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String, index=True, nullable=False)
    year = Column(Integer, index=True, nullable=False)
    type = Column(String, default="annual", nullable=False) # e.g., "annual"
    allocated_days = Column(Float, default=0.0, nullable=False)
    carried_over_days = Column(Float, default=0.0)
    notes = Column(String, nullable=True)
