"""
Administrative endpoints: in-lieu credit management and leave data checks.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from hrleave.core.policy import LeavePolicy
from hrleave.dependencies import get_policy, get_store
from hrleave.schemas.audit import LeaveDataReport
from hrleave.schemas.in_lieu import InLieuCreditResponse, InLieuRecordCreate, InLieuRecordResponse
from hrleave.services import in_lieu
from hrleave.services.leave_audit import validate_leave_data
from hrleave.store import RecordStore

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/in-lieu-records", response_model=List[InLieuRecordResponse])
def list_in_lieu_records(
    employee_id: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    return in_lieu.list_in_lieu_records(store, employee_id)


@router.post("/in-lieu-records", response_model=InLieuCreditResponse, status_code=201)
def create_in_lieu_record(
    payload: InLieuRecordCreate,
    store: RecordStore = Depends(get_store),
    policy: LeavePolicy = Depends(get_policy),
):
    change = in_lieu.add_in_lieu_record(
        store, payload.employee_id, payload.start_date, payload.end_date, policy=policy
    )
    return {
        "message": "In-lieu time added successfully",
        "days_added": change.record["leave_days_added"],
        "new_balance": change.balance.remaining_balance,
        "record": change.record,
    }


@router.delete("/in-lieu-records/{record_id}", response_model=InLieuCreditResponse)
def delete_in_lieu_record(
    record_id: int,
    store: RecordStore = Depends(get_store),
    policy: LeavePolicy = Depends(get_policy),
):
    change = in_lieu.delete_in_lieu_record(store, record_id, policy=policy)
    return {
        "message": "In-lieu record deleted",
        "days_added": -(change.record.get("leave_days_added") or change.record.get("days_added") or 0.0),
        "new_balance": change.balance.remaining_balance,
        "record": change.record,
    }


@router.get("/validate-leave-data", response_model=LeaveDataReport)
def validate_data(store: RecordStore = Depends(get_store)):
    return validate_leave_data(store)
