"""
In-lieu credits.

An employee who works a designated off-day earns a fraction of a leave day per
day worked. Credits are stored as in_lieu_records and folded into the leave
balance by the calculator.
"""

import logging
from datetime import date
from typing import List, NamedTuple, Optional

from hrleave.core.exceptions import NotFoundError, ValidationError
from hrleave.core.policy import LeavePolicy
from hrleave.schemas.leave import LeaveBalanceResult
from hrleave.services.leave_balance import LeaveBalanceService, round2
from hrleave.store import RecordNotFoundError, RecordStore, Row, eq

logger = logging.getLogger(__name__)


class InLieuChange(NamedTuple):
    record: Row
    balance: LeaveBalanceResult


def in_lieu_credit(days_count: int, policy: LeavePolicy) -> float:
    return round2(days_count * policy.in_lieu_rate)


def add_in_lieu_record(
    store: RecordStore,
    employee_id: str,
    start_date: date,
    end_date: date,
    policy: Optional[LeavePolicy] = None,
) -> InLieuChange:
    policy = policy or LeavePolicy.from_settings()
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date")
    try:
        store.select_single("employees", [eq("id", employee_id)], columns=["id"])
    except RecordNotFoundError:
        raise NotFoundError(f"Employee {employee_id} not found")

    days_count = (end_date - start_date).days + 1
    credit = in_lieu_credit(days_count, policy)
    record = store.insert(
        "in_lieu_records",
        {
            "employee_id": employee_id,
            "start_date": start_date,
            "end_date": end_date,
            "days_count": days_count,
            "leave_days_added": credit,
        },
    )
    logger.info(f"Added {credit} in-lieu days for {employee_id} ({days_count} days worked)")
    balance = LeaveBalanceService(store, policy=policy).calculate_leave_balance(employee_id)
    return InLieuChange(record, balance)


def list_in_lieu_records(store: RecordStore, employee_id: Optional[str] = None) -> List[Row]:
    filters = [eq("employee_id", employee_id)] if employee_id else []
    return store.select("in_lieu_records", filters)


def delete_in_lieu_record(
    store: RecordStore,
    record_id: int,
    policy: Optional[LeavePolicy] = None,
) -> InLieuChange:
    try:
        record = store.select_single("in_lieu_records", [eq("id", record_id)])
    except RecordNotFoundError:
        raise NotFoundError(f"In-lieu record {record_id} not found")

    store.delete("in_lieu_records", [eq("id", record_id)])
    logger.info(f"Deleted in-lieu record {record_id} for {record['employee_id']}")
    balance = LeaveBalanceService(store, policy=policy).calculate_leave_balance(record["employee_id"])
    return InLieuChange(record, balance)
