"""
Leave entitlement policy.

Holds the years-of-service tiering used when no explicit yearly allocation
exists for an employee, plus the accrual rate for in-lieu credits.
"""
from dataclasses import dataclass
from numbers import Number
from typing import Any, Optional

from hrleave.core.config import Config, settings


@dataclass(frozen=True)
class LeavePolicy:
    base_days_junior: float = 18.67
    base_days_senior: float = 24.67
    seniority_threshold_years: int = 10
    in_lieu_rate: float = 0.667

    def base_days_for(self, years_of_service: Any) -> float:
        """Return the fallback base entitlement for the given years of service.

        Non-numeric or missing values are treated as junior.
        """
        if isinstance(years_of_service, Number) and not isinstance(years_of_service, bool):
            if years_of_service >= self.seniority_threshold_years:
                return self.base_days_senior
        return self.base_days_junior

    @classmethod
    def from_settings(cls, config: Optional[Config] = None) -> "LeavePolicy":
        policy = (config or settings).leave_policy
        return cls(
            base_days_junior=policy.base_days_junior,
            base_days_senior=policy.base_days_senior,
            seniority_threshold_years=policy.seniority_threshold_years,
            in_lieu_rate=policy.in_lieu_rate,
        )
