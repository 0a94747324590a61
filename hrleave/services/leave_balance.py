"""
Leave Balance Service

Centralized calculation of an employee's annual leave balance:

    remaining balance = base entitlement + in-lieu credits - annual leave taken

The base entitlement comes from an explicit yearly allocation when one exists,
otherwise from the years-of-service tiers of the LeavePolicy. After every
successful calculation the result is written back onto the employee row
(best-effort) so that screens reading the cached fields stay consistent.

Callers must check ``result.error``: the calculator never raises.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from numbers import Number
from typing import Any, Callable, Dict, List, Optional

from hrleave.core.policy import LeavePolicy
from hrleave.schemas.leave import (
    CalculationWarning,
    LeaveBalanceDebug,
    LeaveBalanceResult,
    QueryTrace,
)
from hrleave.store import RecordNotFoundError, RecordStore, RecordStoreError, Row, eq, gte, lte

logger = logging.getLogger(__name__)

ANNUAL_ALLOCATION_TYPE = "annual"
ANNUAL_LEAVE_TYPE = "Annual"


def is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def round2(value: float) -> float:
    """Round half-up to two decimal places."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def resolve_in_lieu_days(record: Row) -> float:
    """
    Legacy field fallback for in-lieu credits.

    Older rows carry ``days_added``, newer ones ``leave_days_added``; the first
    numeric value wins and a record with neither contributes nothing.
    TODO: read only leave_days_added once in_lieu_records is fully backfilled.
    """
    for field in ("days_added", "leave_days_added"):
        value = record.get(field)
        if is_number(value):
            return float(value)
    return 0.0


def counts_as_annual_leave(leave: Row) -> bool:
    # Rows without a leave_type column predate typed leave and are all annual
    return "leave_type" not in leave or leave["leave_type"] == ANNUAL_LEAVE_TYPE


class _QueryTracer:
    """Collects each store call's raw inputs and outputs for diagnostics."""

    def __init__(self):
        self.queries: List[str] = []
        self.results: Dict[str, QueryTrace] = {}

    def record(self, step: str, table: str, data: Any = None, error: Optional[str] = None):
        self.queries.append(table)
        self.results[step] = QueryTrace(data=data, error=error)

    def build(self) -> LeaveBalanceDebug:
        return LeaveBalanceDebug(queries=list(self.queries), results=dict(self.results))


class LeaveBalanceService:
    def __init__(
        self,
        store: RecordStore,
        policy: Optional[LeavePolicy] = None,
        log: Optional[logging.Logger] = None,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.policy = policy or LeavePolicy.from_settings()
        self.logger = log or logger
        self.today = today

    def calculate_leave_balance(
        self,
        employee_id: Optional[str],
        year: Optional[int] = None,
        debug: bool = False,
    ) -> LeaveBalanceResult:
        """
        Calculate the leave balance for a specific employee.

        Args:
            employee_id: The employee's ID
            year: Year to calculate for (defaults to the current year)
            debug: Attach the raw data of every store call to the result

        Returns:
            LeaveBalanceResult; failures are reported through ``error``
        """
        tracer = _QueryTracer() if debug else None
        try:
            return self._calculate(employee_id, year, tracer)
        except Exception as e:
            self.logger.error(f"Unexpected error in leave balance calculation: {e}", exc_info=True)
            return self._failed(f"Unexpected error: {e}", tracer)

    def _calculate(self, employee_id, year, tracer) -> LeaveBalanceResult:
        if not employee_id:
            return self._failed("User ID is required", tracer)

        current_year = year or self.today().year
        warnings: List[CalculationWarning] = []
        self.logger.info(f"Calculating leave balance for user {employee_id} for year {current_year}")

        # Step 1: Employee record (required)
        try:
            employee = self.store.select_single("employees", [eq("id", employee_id)])
            self._trace(tracer, "employee", "employees", data=employee)
        except RecordStoreError as e:
            self._trace(tracer, "employee", "employees", error=e.message)
            self.logger.error(f"Error fetching employee data: {e.message}")
            return self._failed(f"Error fetching employee data: {e.message}", tracer)

        # Step 2: Explicit yearly allocation, falling back to service tiers
        allocation = None
        try:
            allocation = self.store.select_single(
                "leave_allocations",
                [
                    eq("employee_id", employee_id),
                    eq("year", current_year),
                    eq("type", ANNUAL_ALLOCATION_TYPE),
                ],
            )
            self._trace(tracer, "allocation", "leave_allocations", data=allocation)
        except RecordNotFoundError as e:
            self._trace(tracer, "allocation", "leave_allocations", error=e.message)
        except RecordStoreError as e:
            self._trace(tracer, "allocation", "leave_allocations", error=e.message)
            self.logger.error(f"Error fetching leave allocation: {e.message}")
            warnings.append(CalculationWarning(step="allocation", message=e.message))

        allocated_days = allocation.get("allocated_days") if allocation else None
        if is_number(allocated_days) and allocated_days:
            base_leave_balance = float(allocated_days)
            self.logger.info(f"Using allocated leave days: {base_leave_balance}")
        else:
            base_leave_balance = self.policy.base_days_for(employee.get("years_of_service"))
            self.logger.info(f"Using calculated leave days based on years of service: {base_leave_balance}")

        # Step 3: In-lieu credits, lifetime (no year filter)
        in_lieu_balance = 0.0
        try:
            in_lieu_records = self.store.select("in_lieu_records", [eq("employee_id", employee_id)])
            self._trace(tracer, "in_lieu", "in_lieu_records", data=in_lieu_records)
            in_lieu_balance = sum(resolve_in_lieu_days(record) for record in in_lieu_records)
            self.logger.info(f"Calculated in-lieu days: {in_lieu_balance} from {len(in_lieu_records)} records")
        except RecordStoreError as e:
            self._trace(tracer, "in_lieu", "in_lieu_records", error=e.message)
            self.logger.error(f"Error fetching in-lieu data: {e.message}")
            warnings.append(CalculationWarning(step="in_lieu", message=e.message))

        # Step 4: Annual leave taken within the year
        leave_taken = 0.0
        try:
            leaves = self.store.select(
                "leaves",
                [
                    eq("employee_id", employee_id),
                    gte("start_date", date(current_year, 1, 1)),
                    lte("start_date", date(current_year, 12, 31)),
                ],
            )
            self._trace(tracer, "leave_taken", "leaves", data=leaves)
            leave_taken = sum(
                float(leave["days_taken"])
                for leave in leaves
                if counts_as_annual_leave(leave) and is_number(leave.get("days_taken"))
            )
            self.logger.info(f"Calculated Annual leave taken: {leave_taken} from {len(leaves)} records")
            self._log_breakdown(leaves, current_year)
        except RecordStoreError as e:
            self._trace(tracer, "leave_taken", "leaves", error=e.message)
            self.logger.error(f"Error fetching taken leave data: {e.message}")
            warnings.append(CalculationWarning(step="leave_taken", message=e.message))

        # Step 5: Final balance
        remaining_balance = round2(base_leave_balance + in_lieu_balance - leave_taken)
        self.logger.info(
            f"Final leave balance calculation: {base_leave_balance} (base) + {in_lieu_balance} (in-lieu) "
            f"- {leave_taken} (taken) = {remaining_balance}"
        )

        # Step 6: Keep the cached employee fields in sync (best-effort)
        try:
            updated = self.store.update(
                "employees",
                {
                    "annual_leave_balance": in_lieu_balance,  # in-lieu balance only
                    "leave_balance": remaining_balance,  # total remaining balance
                },
                [eq("id", employee_id)],
            )
            self._trace(tracer, "update", "employees", data=updated)
            self.logger.info("Successfully updated employee record with latest leave balances")
        except Exception as e:
            message = getattr(e, "message", str(e))
            self._trace(tracer, "update", "employees", error=message)
            self.logger.error(f"Error updating employee record: {message}")
            warnings.append(CalculationWarning(step="update", message=message))

        return LeaveBalanceResult(
            base_leave_balance=base_leave_balance,
            in_lieu_balance=in_lieu_balance,
            leave_taken=leave_taken,
            remaining_balance=remaining_balance,
            warnings=warnings,
            debug=tracer.build() if tracer else None,
        )

    def _log_breakdown(self, leaves: List[Row], year: int):
        if not leaves:
            return
        breakdown: Dict[str, float] = {}
        for leave in leaves:
            leave_type = leave.get("leave_type") or ANNUAL_LEAVE_TYPE
            days = leave.get("days_taken")
            breakdown[leave_type] = breakdown.get(leave_type, 0.0) + (float(days) if is_number(days) else 0.0)
        self.logger.info(f"Leave breakdown for {year}: {breakdown}")

    @staticmethod
    def _trace(tracer: Optional[_QueryTracer], step: str, table: str, data: Any = None, error: Optional[str] = None):
        if tracer is not None:
            tracer.record(step, table, data=data, error=error)

    @staticmethod
    def _failed(message: str, tracer: Optional[_QueryTracer]) -> LeaveBalanceResult:
        return LeaveBalanceResult(error=message, debug=tracer.build() if tracer else None)


def calculate_leave_balance(
    store: RecordStore,
    employee_id: Optional[str],
    year: Optional[int] = None,
    debug: bool = False,
    policy: Optional[LeavePolicy] = None,
) -> LeaveBalanceResult:
    """Shortcut for a one-off calculation with the configured policy."""
    return LeaveBalanceService(store, policy=policy).calculate_leave_balance(employee_id, year, debug)
