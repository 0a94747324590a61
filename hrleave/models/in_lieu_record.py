from sqlalchemy import Column, Integer, String, Float, Date, DateTime
from sqlalchemy.sql import func
from hrleave.database import Base

class InLieuRecord(Base):
    __tablename__ = "in_lieu_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String, index=True, nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    days_count = Column(Integer, nullable=True)
    # Legacy column; newer rows only populate leave_days_added
    days_added = Column(Float, nullable=True)
    leave_days_added = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
