"""
Leave data validation.

Scans the tables the leave balance calculator reads and reports rows that
would silently distort a balance (missing day counts, inverted date ranges,
credits stored under neither field name, ...).
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import List

from hrleave.schemas.audit import LeaveDataIssue, LeaveDataReport, LeaveDataSummary
from hrleave.services.leave_balance import is_number
from hrleave.store import RecordStore, Row

logger = logging.getLogger(__name__)

AUDITED_TABLES = ("employees", "leaves", "in_lieu_records", "leave_allocations")


def _issue(table: str, row: Row, issue: str, severity: str) -> LeaveDataIssue:
    record_id = row.get("id")
    return LeaveDataIssue(
        table=table,
        record_id=str(record_id) if record_id is not None else None,
        issue=issue,
        severity=severity,
    )


def _check_employees(rows: List[Row]) -> List[LeaveDataIssue]:
    issues = []
    for row in rows:
        if row.get("years_of_service") is None:
            issues.append(_issue("employees", row, "Missing years_of_service; junior entitlement assumed", "medium"))
        elif row["years_of_service"] < 0:
            issues.append(_issue("employees", row, "Negative years_of_service", "high"))
        if row.get("leave_balance") is None:
            issues.append(_issue("employees", row, "Leave balance never calculated", "low"))
    return issues


def _check_leaves(rows: List[Row]) -> List[LeaveDataIssue]:
    issues = []
    for row in rows:
        days = row.get("days_taken")
        if not is_number(days):
            issues.append(_issue("leaves", row, "Missing days_taken; counted as 0", "high"))
        elif days < 0:
            issues.append(_issue("leaves", row, "Negative days_taken", "high"))
        start, end = row.get("start_date"), row.get("end_date")
        if start is None or end is None:
            issues.append(_issue("leaves", row, "Missing start or end date", "high"))
        elif end < start:
            issues.append(_issue("leaves", row, "end_date is before start_date", "high"))
        if row.get("leave_type") is None:
            issues.append(_issue("leaves", row, "Missing leave_type; not counted as annual leave", "medium"))
    return issues


def _check_in_lieu(rows: List[Row]) -> List[LeaveDataIssue]:
    issues = []
    for row in rows:
        legacy, current = row.get("days_added"), row.get("leave_days_added")
        if not is_number(legacy) and not is_number(current):
            issues.append(_issue("in_lieu_records", row, "Neither days_added nor leave_days_added is set", "high"))
        elif is_number(legacy) and is_number(current) and legacy != current:
            issues.append(_issue("in_lieu_records", row, "days_added and leave_days_added disagree; days_added wins", "medium"))
        elif is_number(legacy) and not is_number(current):
            issues.append(_issue("in_lieu_records", row, "Only the legacy days_added field is populated", "low"))
    return issues


def _check_allocations(rows: List[Row]) -> List[LeaveDataIssue]:
    issues = []
    for row in rows:
        allocated = row.get("allocated_days")
        if not is_number(allocated):
            issues.append(_issue("leave_allocations", row, "Missing allocated_days", "high"))
        elif allocated < 0:
            issues.append(_issue("leave_allocations", row, "Negative allocated_days", "high"))
        elif allocated == 0:
            issues.append(_issue("leave_allocations", row, "Zero allocation is ignored in favour of service tiers", "low"))
    return issues


_CHECKS = {
    "employees": _check_employees,
    "leaves": _check_leaves,
    "in_lieu_records": _check_in_lieu,
    "leave_allocations": _check_allocations,
}


def validate_leave_data(store: RecordStore) -> LeaveDataReport:
    """Run every table check and summarise the findings."""
    issues: List[LeaveDataIssue] = []
    totals = {}
    for table in AUDITED_TABLES:
        rows = store.select(table)
        totals[table] = len(rows)
        issues.extend(_CHECKS[table](rows))

    by_table = Counter(issue.table for issue in issues)
    by_severity = Counter(issue.severity for issue in issues)
    logger.info(f"Leave data validation found {len(issues)} issues across {sum(totals.values())} records")

    return LeaveDataReport(
        timestamp=datetime.now(timezone.utc),
        issues=issues,
        summary=LeaveDataSummary(
            total_records=totals,
            issues_by_table={table: by_table.get(table, 0) for table in AUDITED_TABLES},
            issues_by_severity={level: by_severity.get(level, 0) for level in ("high", "medium", "low")},
        ),
    )
