from datetime import date

import pytest

from hrleave.core.exceptions import NotFoundError, ValidationError
from hrleave.core.policy import LeavePolicy
from hrleave.services import in_lieu
from hrleave.store import eq


def test_add_in_lieu_record_credits_rate_per_day(store, make_employee):
    employee = make_employee(years_of_service=1)

    change = in_lieu.add_in_lieu_record(store, employee["id"], date(2024, 1, 6), date(2024, 1, 7), policy=LeavePolicy())

    assert change.record["days_count"] == 2
    assert change.record["leave_days_added"] == 1.33
    assert change.balance.in_lieu_balance == 1.33
    stored = store.select_single("employees", [eq("id", employee["id"])])
    assert stored["annual_leave_balance"] == 1.33


def test_add_in_lieu_record_for_unknown_employee(store):
    with pytest.raises(NotFoundError):
        in_lieu.add_in_lieu_record(store, "nobody", date(2024, 1, 6), date(2024, 1, 6), policy=LeavePolicy())


def test_add_in_lieu_record_rejects_inverted_dates(store, make_employee):
    employee = make_employee()
    with pytest.raises(ValidationError):
        in_lieu.add_in_lieu_record(store, employee["id"], date(2024, 1, 7), date(2024, 1, 6), policy=LeavePolicy())


def test_custom_rate(store, make_employee):
    employee = make_employee()
    policy = LeavePolicy(in_lieu_rate=1.0)

    change = in_lieu.add_in_lieu_record(store, employee["id"], date(2024, 1, 1), date(2024, 1, 3), policy=policy)

    assert change.record["leave_days_added"] == 3


def test_list_and_delete_in_lieu_records(store, make_employee):
    employee = make_employee()
    other = make_employee()
    first = in_lieu.add_in_lieu_record(store, employee["id"], date(2024, 1, 6), date(2024, 1, 6), policy=LeavePolicy())
    in_lieu.add_in_lieu_record(store, other["id"], date(2024, 1, 6), date(2024, 1, 6), policy=LeavePolicy())

    assert len(in_lieu.list_in_lieu_records(store)) == 2
    assert len(in_lieu.list_in_lieu_records(store, employee["id"])) == 1

    change = in_lieu.delete_in_lieu_record(store, first.record["id"], policy=LeavePolicy())

    assert change.balance.in_lieu_balance == 0
    assert in_lieu.list_in_lieu_records(store, employee["id"]) == []


def test_delete_unknown_in_lieu_record(store):
    with pytest.raises(NotFoundError):
        in_lieu.delete_in_lieu_record(store, 404)
