import logging
import operator
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Type

from sqlalchemy import Date, DateTime, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hrleave.database import Base
from hrleave.models import Employee, InLieuRecord, Leave, LeaveAllocation
from hrleave.store.base import (
    SUPPORTED_OPS,
    Filter,
    RecordStore,
    RecordStoreError,
    Row,
)

logger = logging.getLogger(__name__)

DEFAULT_TABLES: Dict[str, Type[Base]] = {
    "employees": Employee,
    "leave_allocations": LeaveAllocation,
    "in_lieu_records": InLieuRecord,
    "leaves": Leave,
}

_OPERATORS = {
    "eq": operator.eq,
    "neq": operator.ne,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


class SqlAlchemyRecordStore(RecordStore):
    """
    Record store backed by a SQLAlchemy session.

    Table names map onto declarative models. Each write commits immediately,
    so callers get the same per-statement semantics as a hosted REST client.
    """

    def __init__(self, session: Session, tables: Optional[Dict[str, Type[Base]]] = None):
        self.session = session
        self.tables = tables or DEFAULT_TABLES

    # --- helpers -----------------------------------------------------------

    def _model(self, table: str) -> Type[Base]:
        model = self.tables.get(table)
        if model is None:
            raise RecordStoreError(f"Unknown table: {table}", code="UNKNOWN_TABLE")
        return model

    def _column(self, model: Type[Base], name: str):
        columns = inspect(model).columns
        if name not in columns:
            raise RecordStoreError(
                f"Unknown column {name} on {model.__tablename__}", code="UNKNOWN_COLUMN"
            )
        return columns[name]

    def _coerce(self, column, value: Any) -> Any:
        # Accept ISO strings for date columns, as JSON callers send them
        if isinstance(value, str):
            try:
                if isinstance(column.type, DateTime):
                    return datetime.fromisoformat(value)
                if isinstance(column.type, Date):
                    return date.fromisoformat(value)
            except ValueError as e:
                raise RecordStoreError(
                    f"Invalid value for {column.key}: {value!r}", code="BAD_VALUE"
                ) from e
        return value

    def _clauses(self, model: Type[Base], filters: Sequence[Filter]) -> list:
        clauses = []
        for f in filters:
            if f.op not in SUPPORTED_OPS:
                raise RecordStoreError(f"Unsupported filter operator: {f.op}", code="BAD_FILTER")
            column = self._column(model, f.column)
            clauses.append(_OPERATORS[f.op](getattr(model, column.key), self._coerce(column, f.value)))
        return clauses

    def _values(self, model: Type[Base], values: Row) -> Row:
        return {
            key: self._coerce(self._column(model, key), value)
            for key, value in values.items()
        }

    def _to_dict(self, obj: Base, columns: Optional[Sequence[str]] = None) -> Row:
        mapper = inspect(type(obj))
        keys = columns or [attr.key for attr in mapper.column_attrs]
        return {key: getattr(obj, key) for key in keys}

    def _query(self, model: Type[Base], filters: Sequence[Filter]):
        primary_key = inspect(model).primary_key
        return self.session.query(model).filter(*self._clauses(model, filters)).order_by(*primary_key)

    def _fail(self, action: str, table: str, exc: SQLAlchemyError) -> RecordStoreError:
        self.session.rollback()
        logger.error(f"Record store {action} on {table} failed: {exc}")
        return RecordStoreError(f"Database error during {action} on {table}: {exc}", code="DB_ERROR")

    # --- RecordStore -------------------------------------------------------

    def select(self, table: str, filters: Sequence[Filter] = (), columns: Optional[Sequence[str]] = None) -> List[Row]:
        model = self._model(table)
        if columns:
            for name in columns:
                self._column(model, name)
        try:
            rows = self._query(model, filters).all()
        except SQLAlchemyError as e:
            raise self._fail("select", table, e) from e
        return [self._to_dict(row, columns) for row in rows]

    def insert(self, table: str, values: Row) -> Row:
        model = self._model(table)
        obj = model(**self._values(model, values))
        try:
            self.session.add(obj)
            self.session.commit()
            self.session.refresh(obj)
        except SQLAlchemyError as e:
            raise self._fail("insert", table, e) from e
        return self._to_dict(obj)

    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        if not filters:
            raise RecordStoreError(f"Refusing to update every row of {table}", code="MISSING_FILTER")
        model = self._model(table)
        coerced = self._values(model, values)
        try:
            rows = self._query(model, filters).all()
            for row in rows:
                for key, value in coerced.items():
                    setattr(row, key, value)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("update", table, e) from e
        return [self._to_dict(row) for row in rows]

    def delete(self, table: str, filters: Sequence[Filter]) -> int:
        if not filters:
            raise RecordStoreError(f"Refusing to delete every row of {table}", code="MISSING_FILTER")
        model = self._model(table)
        try:
            count = (
                self.session.query(model)
                .filter(*self._clauses(model, filters))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", table, e) from e
        return count
