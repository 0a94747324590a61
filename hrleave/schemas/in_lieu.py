from pydantic import BaseModel, ConfigDict, model_validator
from datetime import date, datetime
from typing import Optional


class InLieuRecordCreate(BaseModel):
    employee_id: str
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_dates(self) -> "InLieuRecordCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class InLieuRecordResponse(BaseModel):
    id: int
    employee_id: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days_count: Optional[int] = None
    days_added: Optional[float] = None
    leave_days_added: Optional[float] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class InLieuCreditResponse(BaseModel):
    message: str
    days_added: float
    new_balance: float
    record: InLieuRecordResponse
