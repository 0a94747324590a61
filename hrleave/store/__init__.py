from hrleave.store.base import (
    Filter,
    MultipleRecordsError,
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
    Row,
    eq,
    gte,
    lte,
    neq,
)
from hrleave.store.sqlalchemy_store import SqlAlchemyRecordStore

__all__ = [
    "Filter",
    "MultipleRecordsError",
    "RecordNotFoundError",
    "RecordStore",
    "RecordStoreError",
    "Row",
    "SqlAlchemyRecordStore",
    "eq",
    "gte",
    "lte",
    "neq",
]
