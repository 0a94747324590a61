from pydantic import BaseModel
from datetime import datetime
from typing import Dict, List, Literal, Optional

Severity = Literal["high", "medium", "low"]


class LeaveDataIssue(BaseModel):
    table: str
    record_id: Optional[str] = None
    issue: str
    severity: Severity


class LeaveDataSummary(BaseModel):
    total_records: Dict[str, int]
    issues_by_table: Dict[str, int]
    issues_by_severity: Dict[str, int]


class LeaveDataReport(BaseModel):
    timestamp: datetime
    issues: List[LeaveDataIssue]
    summary: LeaveDataSummary
