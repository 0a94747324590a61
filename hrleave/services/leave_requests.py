"""
Leave Request Service Layer

Creating, cancelling and reviewing rows of the ``leaves`` table. Every change
is followed by a leave balance recalculation for the year the leave starts in,
so the cached balance on the employee row never lags behind.
"""

import logging
from datetime import date
from typing import NamedTuple, Optional

from hrleave.core.exceptions import LeaveStateError, NotFoundError, ValidationError
from hrleave.core.policy import LeavePolicy
from hrleave.models.leave import LeaveStatus
from hrleave.schemas.leave import LeaveBalanceResult
from hrleave.services.leave_balance import LeaveBalanceService
from hrleave.store import RecordNotFoundError, RecordStore, Row, eq

logger = logging.getLogger(__name__)


class LeaveChange(NamedTuple):
    record: Row
    balance: LeaveBalanceResult


def inclusive_days(start_date: date, end_date: date) -> int:
    return (end_date - start_date).days + 1


def _get_leave(store: RecordStore, leave_id: int) -> Row:
    try:
        return store.select_single("leaves", [eq("id", leave_id)])
    except RecordNotFoundError:
        raise NotFoundError(f"Leave request {leave_id} not found")


def _recalculate(store: RecordStore, record: Row, policy: Optional[LeavePolicy]) -> LeaveBalanceResult:
    year = record["start_date"].year if record.get("start_date") else None
    return LeaveBalanceService(store, policy=policy).calculate_leave_balance(record["employee_id"], year)


def request_leave(
    store: RecordStore,
    employee_id: str,
    start_date: date,
    end_date: date,
    leave_type: str = "Annual",
    reason: Optional[str] = None,
    days_taken: Optional[float] = None,
    policy: Optional[LeavePolicy] = None,
) -> LeaveChange:
    """
    Record a pending leave request.

    ``days_taken`` defaults to the inclusive number of calendar days.
    """
    if not employee_id:
        raise ValidationError("employee_id is required")
    if end_date < start_date:
        raise ValidationError(
            "end_date must not be before start_date",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )
    if days_taken is None:
        days_taken = float(inclusive_days(start_date, end_date))
    elif days_taken < 0:
        raise ValidationError("days_taken must not be negative")

    logger.info(f"Requesting {leave_type} leave for {employee_id} from {start_date} to {end_date}")
    record = store.insert(
        "leaves",
        {
            "employee_id": employee_id,
            "start_date": start_date,
            "end_date": end_date,
            "days_taken": days_taken,
            "leave_type": leave_type,
            "reason": reason,
            "status": LeaveStatus.PENDING.value,
        },
    )
    return LeaveChange(record, _recalculate(store, record, policy))


def cancel_leave(store: RecordStore, leave_id: int, policy: Optional[LeavePolicy] = None) -> LeaveChange:
    """Delete a leave request. Only pending requests can be cancelled."""
    record = _get_leave(store, leave_id)
    if record.get("status") != LeaveStatus.PENDING.value:
        raise LeaveStateError(f"Cannot cancel leave in {record.get('status')} status")

    logger.info(f"Cancelling leave request with ID {leave_id}")
    store.delete("leaves", [eq("id", leave_id)])
    return LeaveChange(record, _recalculate(store, record, policy))


def set_leave_status(
    store: RecordStore,
    leave_id: int,
    status: LeaveStatus,
    policy: Optional[LeavePolicy] = None,
) -> LeaveChange:
    """
    Approve or reject a leave request.

    Every stored leave row counts against the balance whatever its status,
    so a rejected request is removed like a cancelled one. The returned
    record carries the rejected status.
    """
    record = _get_leave(store, leave_id)
    status_value = LeaveStatus(status).value
    if record.get("status") == status_value:
        raise LeaveStateError(f"Leave request {leave_id} is already {status_value}")

    if status_value == LeaveStatus.REJECTED.value:
        store.delete("leaves", [eq("id", leave_id)])
        logger.info(f"Leave request {leave_id} rejected and removed (was {record.get('status')})")
        rejected = dict(record, status=status_value)
        return LeaveChange(rejected, _recalculate(store, rejected, policy))

    updated = store.update("leaves", {"status": status_value}, [eq("id", leave_id)])[0]
    logger.info(f"Leave request {leave_id} moved from {record.get('status')} to {status_value}")
    return LeaveChange(updated, _recalculate(store, updated, policy))


def list_leaves(store: RecordStore, employee_id: str, status: Optional[str] = None):
    filters = [eq("employee_id", employee_id)]
    if status:
        filters.append(eq("status", status))
    return store.select("leaves", filters)
