# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import employee, leave_allocation, in_lieu_record, leave

# Explicit class exports for cleaner imports
from .employee import Employee
from .leave_allocation import LeaveAllocation
from .in_lieu_record import InLieuRecord
from .leave import Leave, LeaveStatus

__all__ = [
    "Employee",
    "LeaveAllocation",
    "InLieuRecord",
    "Leave",
    "LeaveStatus",
]
