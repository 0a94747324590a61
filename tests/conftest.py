import operator
import os
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from hrleave.database import Base, get_db
from hrleave.main import app
from hrleave.store import Filter, RecordStore, RecordStoreError, SqlAlchemyRecordStore
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function; tables are emptied afterwards."""
    session = TestingSessionLocal()

    yield session

    session.close()
    # The record store commits each write, so clean tables explicitly
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())

@pytest.fixture(scope="function")
def store(db_session):
    return SqlAlchemyRecordStore(db_session)

@pytest.fixture(scope="function")
def make_employee(store):
    """Factory for employee rows."""
    counter = {"n": 0}

    def _make_employee(years_of_service=3, **values):
        counter["n"] += 1
        values.setdefault("name", f"Employee {counter['n']}")
        values.setdefault("email", f"employee{counter['n']}@example.com")
        return store.insert("employees", {"years_of_service": years_of_service, **values})
    return _make_employee

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


_OPS = {
    "eq": operator.eq,
    "neq": operator.ne,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


class InMemoryStore(RecordStore):
    """
    Dict-backed store for exercising row shapes SQL cannot produce
    (missing keys, legacy fields). Records every call in ``calls`` and
    raises RecordStoreError for any (table, action) listed in ``failures``.
    """

    def __init__(self, tables: Optional[Dict[str, List[dict]]] = None, failures=()):
        self.tables = defaultdict(list, {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()})
        self.failures = set(failures)
        self.calls = []

    def _check(self, table, action):
        self.calls.append((action, table))
        if (table, action) in self.failures:
            raise RecordStoreError(f"{action} on {table} failed", code="TEST_FAILURE")

    @staticmethod
    def _matches(row, filters: Sequence[Filter]):
        for f in filters:
            if f.column not in row or row[f.column] is None:
                return False
            if not _OPS[f.op](row[f.column], f.value):
                return False
        return True

    def select(self, table, filters=(), columns=None):
        self._check(table, "select")
        rows = [dict(r) for r in self.tables[table] if self._matches(r, filters)]
        if columns:
            rows = [{c: r.get(c) for c in columns} for r in rows]
        return rows

    def insert(self, table, values):
        self._check(table, "insert")
        row = dict(values)
        row.setdefault("id", len(self.tables[table]) + 1)
        self.tables[table].append(row)
        return dict(row)

    def update(self, table, values, filters):
        self._check(table, "update")
        updated = []
        for row in self.tables[table]:
            if self._matches(row, filters):
                row.update(values)
                updated.append(dict(row))
        return updated

    def delete(self, table, filters):
        self._check(table, "delete")
        before = len(self.tables[table])
        self.tables[table] = [r for r in self.tables[table] if not self._matches(r, filters)]
        return before - len(self.tables[table])


@pytest.fixture
def memory_store():
    return InMemoryStore
