from hrleave.core.config import Config, LeavePolicySettings
from hrleave.core.policy import LeavePolicy


def test_defaults_match_statutory_tiers():
    policy = LeavePolicy()
    assert policy.base_days_for(9) == 18.67
    assert policy.base_days_for(10) == 24.67


def test_missing_years_of_service_counts_as_junior():
    policy = LeavePolicy()
    assert policy.base_days_for(None) == 18.67
    assert policy.base_days_for("12") == 18.67
    assert policy.base_days_for(True) == 18.67


def test_from_settings():
    config = Config(leave_policy=LeavePolicySettings(
        base_days_junior=10, base_days_senior=20, seniority_threshold_years=3, in_lieu_rate=0.5,
    ))

    policy = LeavePolicy.from_settings(config)

    assert policy == LeavePolicy(base_days_junior=10, base_days_senior=20, seniority_threshold_years=3, in_lieu_rate=0.5)
    assert policy.base_days_for(3) == 20
