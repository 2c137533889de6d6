"""
Adapters layer - relational storage via SQLAlchemy.
"""

from .database import Base, create_engine, create_session_factory, drop_db, init_db
from .orm import TimeSlotRecord
from .timeslot_repository import TimeSlotRepository

__all__ = [
    "Base",
    "TimeSlotRecord",
    "TimeSlotRepository",
    "create_engine",
    "create_session_factory",
    "drop_db",
    "init_db",
]
