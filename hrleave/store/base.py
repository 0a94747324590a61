"""
Record Store interface.

A small table-oriented data-access contract: rows go in and come out as plain
dicts, filters are (column, op, value) triples, and every failure is raised as
a RecordStoreError subclass. Services depend on this interface only, never on
a concrete database client.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

Row = Dict[str, Any]

SUPPORTED_OPS = ("eq", "neq", "gt", "gte", "lt", "lte")


class Filter(NamedTuple):
    column: str
    op: str
    value: Any


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)


class RecordStoreError(Exception):
    def __init__(self, message: str, code: str = "STORE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class RecordNotFoundError(RecordStoreError):
    def __init__(self, table: str):
        super().__init__(f"No rows found in {table}", code="NOT_FOUND")


class MultipleRecordsError(RecordStoreError):
    def __init__(self, table: str, count: int):
        super().__init__(f"Expected a single row from {table}, got {count}", code="MULTIPLE_ROWS")


class RecordStore(ABC):
    """Abstract CRUD access to named tables."""

    @abstractmethod
    def select(self, table: str, filters: Sequence[Filter] = (), columns: Optional[Sequence[str]] = None) -> List[Row]:
        """Return every row of ``table`` matching all ``filters``."""

    def select_single(self, table: str, filters: Sequence[Filter] = (), columns: Optional[Sequence[str]] = None) -> Row:
        """Return exactly one matching row, raising if there are zero or several."""
        rows = self.select(table, filters, columns)
        if not rows:
            raise RecordNotFoundError(table)
        if len(rows) > 1:
            raise MultipleRecordsError(table, len(rows))
        return rows[0]

    @abstractmethod
    def insert(self, table: str, values: Row) -> Row:
        """Insert one row and return it as stored."""

    @abstractmethod
    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        """Apply ``values`` to matching rows and return the updated rows."""

    @abstractmethod
    def delete(self, table: str, filters: Sequence[Filter]) -> int:
        """Delete matching rows and return how many were removed."""
