"""
Shared FastAPI dependencies.

Routers never touch the SQLAlchemy session directly: they receive a
RecordStore bound to the request's session, plus the configured LeavePolicy.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from hrleave.core.policy import LeavePolicy
from hrleave.database import get_db
from hrleave.store import RecordStore, SqlAlchemyRecordStore


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return SqlAlchemyRecordStore(db)


def get_policy() -> LeavePolicy:
    return LeavePolicy.from_settings()


__all__ = ["get_store", "get_policy"]
