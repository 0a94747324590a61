"""
Recalculate and write back leave balances for every employee.

Usage: python -m scripts.recalculate_balances [year]
"""
import sys

from hrleave.database import SessionLocal, init_db
from hrleave.services.leave_balance import LeaveBalanceService
from hrleave.store import SqlAlchemyRecordStore


def recalculate_all(year=None):
    init_db()
    db = SessionLocal()
    failures = 0
    try:
        store = SqlAlchemyRecordStore(db)
        service = LeaveBalanceService(store)
        employees = store.select("employees", columns=["id", "name"])
        print(f"Recalculating leave balances for {len(employees)} employees...")

        for employee in employees:
            result = service.calculate_leave_balance(employee["id"], year)
            if result.error:
                failures += 1
                print(f" ✗ {employee['name'] or employee['id']}: {result.error}")
                continue
            flag = " (degraded)" if result.degraded else ""
            print(
                f" ✓ {employee['name'] or employee['id']}: {result.base_leave_balance} + "
                f"{result.in_lieu_balance} - {result.leave_taken} = {result.remaining_balance}{flag}"
            )
    finally:
        db.close()
    return failures


if __name__ == "__main__":
    target_year = int(sys.argv[1]) if len(sys.argv) > 1 else None
    sys.exit(1 if recalculate_all(target_year) else 0)
