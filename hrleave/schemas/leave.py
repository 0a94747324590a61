from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from hrleave.models.leave import LeaveStatus


class CalculationWarning(BaseModel):
    """A tolerated failure that lowers confidence in a computed balance."""
    step: str
    message: str


class QueryTrace(BaseModel):
    data: Any = None
    error: Optional[str] = None


class LeaveBalanceDebug(BaseModel):
    queries: List[str] = []
    results: Dict[str, QueryTrace] = {}


class LeaveBalanceResult(BaseModel):
    base_leave_balance: float = 0.0
    in_lieu_balance: float = 0.0
    leave_taken: float = 0.0
    remaining_balance: float = 0.0
    error: Optional[str] = None
    warnings: List[CalculationWarning] = []
    debug: Optional[LeaveBalanceDebug] = None

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)


class LeaveRequestCreate(BaseModel):
    employee_id: str
    start_date: date
    end_date: date
    leave_type: str = "Annual"
    reason: Optional[str] = None
    days_taken: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_dates(self) -> "LeaveRequestCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class LeaveStatusUpdate(BaseModel):
    status: LeaveStatus


class LeaveRecordResponse(BaseModel):
    id: int
    employee_id: str
    leave_type: Optional[str] = None
    start_date: date
    end_date: date
    days_taken: Optional[float] = None
    reason: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LeaveBalanceDiagnostic(BaseModel):
    employee_id: str
    year: int
    stored_leave_balance: Optional[float] = None
    stored_annual_leave_balance: Optional[float] = None
    years_of_service: Optional[int] = None
    calculation: LeaveBalanceResult
    stored_balance_in_sync: bool


# Resolve forward references for Pydantic V2
LeaveBalanceResult.model_rebuild()
LeaveRecordResponse.model_rebuild()


class LeaveChangeResponse(BaseModel):
    record: LeaveRecordResponse
    balance: LeaveBalanceResult
