from datetime import date

import pytest

from hrleave.store import (
    MultipleRecordsError,
    RecordNotFoundError,
    RecordStoreError,
    eq,
    gte,
    lte,
    neq,
)


def test_insert_returns_stored_row(store):
    row = store.insert("employees", {"name": "Ada", "email": "ada@example.com", "years_of_service": 4})

    assert row["id"]
    assert row["name"] == "Ada"
    assert row["years_of_service"] == 4
    assert row["leave_balance"] is None


def test_select_applies_every_filter(store, make_employee):
    employee = make_employee()
    other = make_employee()
    for start in ("2024-01-01", "2024-06-15", "2024-12-31", "2025-01-01"):
        store.insert("leaves", {"employee_id": employee["id"], "start_date": start, "end_date": start, "days_taken": 1})
    store.insert("leaves", {"employee_id": other["id"], "start_date": "2024-03-03", "end_date": "2024-03-03", "days_taken": 1})

    rows = store.select(
        "leaves",
        [eq("employee_id", employee["id"]), gte("start_date", "2024-01-01"), lte("start_date", date(2024, 12, 31))],
    )

    assert [r["start_date"] for r in rows] == [date(2024, 1, 1), date(2024, 6, 15), date(2024, 12, 31)]


def test_select_with_columns_projects_rows(store, make_employee):
    employee = make_employee(years_of_service=7)

    rows = store.select("employees", [eq("id", employee["id"])], columns=["id", "years_of_service"])

    assert rows == [{"id": employee["id"], "years_of_service": 7}]


def test_select_single_raises_on_zero_rows(store):
    with pytest.raises(RecordNotFoundError) as exc:
        store.select_single("employees", [eq("id", "missing")])
    assert exc.value.code == "NOT_FOUND"


def test_select_single_raises_on_many_rows(store, make_employee):
    make_employee(years_of_service=1)
    make_employee(years_of_service=1)

    with pytest.raises(MultipleRecordsError):
        store.select_single("employees", [eq("years_of_service", 1)])


def test_update_changes_matching_rows_only(store, make_employee):
    first = make_employee()
    second = make_employee()

    updated = store.update("employees", {"leave_balance": 12.5}, [eq("id", first["id"])])

    assert [r["id"] for r in updated] == [first["id"]]
    assert store.select_single("employees", [eq("id", first["id"])])["leave_balance"] == 12.5
    assert store.select_single("employees", [eq("id", second["id"])])["leave_balance"] is None


def test_delete_returns_count(store, make_employee):
    employee = make_employee()
    store.insert("in_lieu_records", {"employee_id": employee["id"], "leave_days_added": 1})
    store.insert("in_lieu_records", {"employee_id": employee["id"], "leave_days_added": 2})

    assert store.delete("in_lieu_records", [eq("employee_id", employee["id"]), neq("leave_days_added", 2)]) == 1
    assert len(store.select("in_lieu_records")) == 1


def test_unfiltered_mutations_are_refused(store):
    with pytest.raises(RecordStoreError) as exc:
        store.update("employees", {"leave_balance": 0}, [])
    assert exc.value.code == "MISSING_FILTER"

    with pytest.raises(RecordStoreError):
        store.delete("leaves", [])


def test_unknown_table_and_column(store):
    with pytest.raises(RecordStoreError) as exc:
        store.select("salaries")
    assert exc.value.code == "UNKNOWN_TABLE"

    with pytest.raises(RecordStoreError) as exc:
        store.select("employees", [eq("salary", 1)])
    assert exc.value.code == "UNKNOWN_COLUMN"


def test_unsupported_operator(store):
    from hrleave.store import Filter

    with pytest.raises(RecordStoreError) as exc:
        store.select("employees", [Filter("name", "like", "A%")])
    assert exc.value.code == "BAD_FILTER"


def test_database_errors_are_wrapped(store, make_employee):
    make_employee(email="dup@example.com")

    with pytest.raises(RecordStoreError) as exc:
        make_employee(email="dup@example.com")
    assert exc.value.code == "DB_ERROR"

    # Session is usable again after the rollback
    assert len(store.select("employees")) == 1


def test_malformed_date_strings_are_store_errors(store, make_employee):
    employee = make_employee()

    with pytest.raises(RecordStoreError) as exc:
        store.select("leaves", [gte("start_date", "2024-13-01")])
    assert exc.value.code == "BAD_VALUE"

    with pytest.raises(RecordStoreError) as exc:
        store.insert("leaves", {"employee_id": employee["id"], "start_date": "not-a-date", "end_date": "2024-01-02"})
    assert exc.value.code == "BAD_VALUE"
    assert store.select("leaves") == []
