"""
Diagnostic endpoints for leave balance issues. Never served in production.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from hrleave.core.config import settings
from hrleave.core.policy import LeavePolicy
from hrleave.dependencies import get_policy, get_store
from hrleave.schemas.leave import LeaveBalanceDiagnostic
from hrleave.services.leave_balance import LeaveBalanceService
from hrleave.store import RecordNotFoundError, RecordStore, eq


def require_debug_enabled():
    if not settings.debug_endpoints_active:
        raise HTTPException(status_code=404, detail="Not found")


router = APIRouter(
    prefix="/debug",
    tags=["debug"],
    dependencies=[Depends(require_debug_enabled)],
)


@router.get("/leave-balance/{employee_id}", response_model=LeaveBalanceDiagnostic)
def diagnose_leave_balance(
    employee_id: str,
    year: Optional[int] = None,
    store: RecordStore = Depends(get_store),
    policy: LeavePolicy = Depends(get_policy),
):
    try:
        employee = store.select_single("employees", [eq("id", employee_id)])
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail=f"Employee not found: {employee_id}")

    current_year = year or date.today().year
    calculation = LeaveBalanceService(store, policy=policy).calculate_leave_balance(
        employee_id, current_year, debug=True
    )
    return LeaveBalanceDiagnostic(
        employee_id=employee_id,
        year=current_year,
        # Stored values as they were before this calculation wrote back
        stored_leave_balance=employee.get("leave_balance"),
        stored_annual_leave_balance=employee.get("annual_leave_balance"),
        years_of_service=employee.get("years_of_service"),
        calculation=calculation,
        stored_balance_in_sync=(
            employee.get("leave_balance") == calculation.remaining_balance
            and employee.get("annual_leave_balance") == calculation.in_lieu_balance
        ),
    )
