from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hrleave.core.policy import LeavePolicy
from hrleave.core.schemas import ApiResponse
from hrleave.dependencies import get_policy, get_store
from hrleave.schemas.leave import (
    LeaveBalanceResult,
    LeaveChangeResponse,
    LeaveRecordResponse,
    LeaveRequestCreate,
    LeaveStatusUpdate,
)
from hrleave.services import leave_requests
from hrleave.services.leave_balance import LeaveBalanceService
from hrleave.store import RecordStore

router = APIRouter(
    prefix="/leave",
    tags=["leave"]
)


@router.get("/balance/{employee_id}", response_model=ApiResponse[LeaveBalanceResult])
def get_leave_balance(
    employee_id: str,
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    store: RecordStore = Depends(get_store),
    policy: LeavePolicy = Depends(get_policy),
):
    """
    Recalculate the leave balance for an employee.
    A failed calculation is reported with success=false and the zeroed result.
    """
    result = LeaveBalanceService(store, policy=policy).calculate_leave_balance(employee_id, year)
    if result.error:
        return ApiResponse.fail(result.error, code="LEAVE_BALANCE_UNAVAILABLE", data=result)
    metadata = {"year": year or date.today().year, "degraded": result.degraded}
    return ApiResponse.ok(result, metadata=metadata)


@router.get("/requests", response_model=List[LeaveRecordResponse])
def list_leave_requests(
    employee_id: str,
    status: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    return leave_requests.list_leaves(store, employee_id, status)


@router.post("/requests", response_model=LeaveChangeResponse, status_code=201)
def submit_leave_request(
    request: LeaveRequestCreate,
    store: RecordStore = Depends(get_store),
    policy: LeavePolicy = Depends(get_policy),
):
    change = leave_requests.request_leave(
        store,
        request.employee_id,
        request.start_date,
        request.end_date,
        leave_type=request.leave_type,
        reason=request.reason,
        days_taken=request.days_taken,
        policy=policy,
    )
    return change._asdict()


@router.delete("/requests/{leave_id}", response_model=LeaveChangeResponse)
def cancel_leave_request(
    leave_id: int,
    store: RecordStore = Depends(get_store),
    policy: LeavePolicy = Depends(get_policy),
):
    return leave_requests.cancel_leave(store, leave_id, policy=policy)._asdict()


@router.put("/requests/{leave_id}/status", response_model=LeaveChangeResponse)
def update_leave_status(
    leave_id: int,
    update: LeaveStatusUpdate,
    store: RecordStore = Depends(get_store),
    policy: LeavePolicy = Depends(get_policy),
):
    return leave_requests.set_leave_status(store, leave_id, update.status, policy=policy)._asdict()
