import os
import logging
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class LeavePolicySettings(BaseModel):
    # Statutory entitlement tiers by years of service
    base_days_junior: float = Field(default=float(os.getenv("LEAVE_BASE_DAYS_JUNIOR", "18.67")))
    base_days_senior: float = Field(default=float(os.getenv("LEAVE_BASE_DAYS_SENIOR", "24.67")))
    seniority_threshold_years: int = Field(default=int(os.getenv("LEAVE_SENIORITY_THRESHOLD_YEARS", "10")))
    # Leave days credited per day worked in lieu
    in_lieu_rate: float = Field(default=float(os.getenv("IN_LIEU_RATE", "0.667")))


class Config(BaseModel):
    app_name: str = "HR Leave Service"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    request_id_header: str = "X-Request-ID"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    # Leave rules
    leave_policy: LeavePolicySettings = LeavePolicySettings()

    # Diagnostic endpoints are never served in production
    enable_debug_endpoints: bool = _env_flag("ENABLE_DEBUG_ENDPOINTS", "true")

    @property
    def debug_endpoints_active(self) -> bool:
        return self.enable_debug_endpoints and self.environment != "production"


settings = Config()

_logger = logging.getLogger(__name__)
if settings.environment == "production" and settings.database_url.startswith("sqlite"):
    _logger.warning("⚠ Running in production against SQLite (%s)", settings.database_url)
