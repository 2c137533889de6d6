"""
ORM mapping of the time_slots table.

The row is flat: kind-specific columns are NULL where the slot type has no
such field.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from .database import Base


class TimeSlotRecord(Base):
    __tablename__ = "time_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(16), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=True)  # WEEKLY only
    date = Column(String(10), nullable=True, index=True)  # YYYY-MM-DD
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)
    is_booked = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "day_of_week IS NULL OR (day_of_week >= 0 AND day_of_week <= 6)",
            name="ck_time_slots_day_of_week",
        ),
    )

    def __repr__(self):
        return f"<TimeSlotRecord(id={self.id}, type={self.type}, booked={self.is_booked})>"
