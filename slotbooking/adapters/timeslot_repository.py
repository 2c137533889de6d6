"""
Data access for time slots on top of an SQLAlchemy async session factory.

Every SQLAlchemy failure is re-raised as ``StorageError`` with the original
exception attached; validation errors are raised before any session is opened.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..domain.exceptions import StorageError
from ..domain.models import (
    DayOnlySchedule,
    DayOnlySlotSpec,
    FlexibleSchedule,
    FlexibleSlotSpec,
    SlotFilter,
    SlotType,
    TimeSlot,
    WeeklySchedule,
    WeeklySlotSpec,
)
from ..domain.validation import (
    normalize_time,
    validate_day_only,
    validate_flexible,
    validate_weekly,
)
from .orm import TimeSlotRecord

logger = logging.getLogger(__name__)

# Bulk UPDATE/DELETE statements run as plain SQL; sessions are short-lived and hold
# no loaded objects to keep in sync
_NO_SYNC = {"synchronize_session": False}


class TimeSlotRepository:
    """
    Repository for the ``time_slots`` table.

    The session factory is injected so tests can hand in one bound to an
    in-memory SQLite engine.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create_weekly(self, spec: WeeklySlotSpec) -> TimeSlot:
        """Create a weekly recurring slot."""
        validate_weekly(spec)
        record = TimeSlotRecord(
            type=SlotType.WEEKLY.value,
            day_of_week=spec.day_of_week,
            start_time=normalize_time(spec.start_time),
            end_time=normalize_time(spec.end_time),
            is_booked=False,
        )
        return await self._insert(record, "Failed to create weekly slot")

    async def create_flexible(self, spec: FlexibleSlotSpec) -> TimeSlot:
        """Create a one-off slot on a date with a time range."""
        validate_flexible(spec)
        record = TimeSlotRecord(
            type=SlotType.FLEXIBLE.value,
            date=spec.date,
            start_time=normalize_time(spec.start_time),
            end_time=normalize_time(spec.end_time),
            is_booked=False,
        )
        return await self._insert(record, "Failed to create flexible slot")

    async def create_day_only(self, spec: DayOnlySlotSpec) -> TimeSlot:
        """Create a whole-day slot without a time range."""
        validate_day_only(spec)
        record = TimeSlotRecord(
            type=SlotType.DAY_ONLY.value,
            date=spec.date,
            is_booked=False,
        )
        return await self._insert(record, "Failed to create day-only slot")

    async def find_by_id(self, slot_id: int) -> Optional[TimeSlot]:
        try:
            async with self._session_factory() as session:
                record = await session.get(TimeSlotRecord, slot_id)
                return self._to_domain(record) if record is not None else None
        except SQLAlchemyError as exc:
            raise self._storage_error(f"Failed to find slot with ID {slot_id}", exc) from exc

    async def list_all(self, slot_filter: Optional[SlotFilter] = None) -> List[TimeSlot]:
        """
        List slots matching ``slot_filter``.

        Ordered by date (undated weekly slots last), then start time, then id.
        """
        stmt = select(TimeSlotRecord)

        if slot_filter is not None:
            if slot_filter.type is not None:
                stmt = stmt.where(TimeSlotRecord.type == SlotType(slot_filter.type).value)
            if slot_filter.is_booked is not None:
                stmt = stmt.where(TimeSlotRecord.is_booked == slot_filter.is_booked)
            if slot_filter.day_of_week is not None:
                stmt = stmt.where(TimeSlotRecord.day_of_week == slot_filter.day_of_week)
            if slot_filter.date is not None:
                stmt = stmt.where(TimeSlotRecord.date == slot_filter.date)

        stmt = stmt.order_by(
            TimeSlotRecord.date.asc().nulls_last(),
            TimeSlotRecord.start_time.asc().nulls_last(),
            TimeSlotRecord.id.asc(),
        )

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [self._to_domain(record) for record in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise self._storage_error("Failed to list slots", exc) from exc

    async def update_booking_status(self, slot_id: int, is_booked: bool) -> Optional[TimeSlot]:
        """Set the booking flag unconditionally. Returns ``None`` if the slot is gone."""
        return await self.set_booked_if(slot_id, is_booked, expected=None)

    async def set_booked_if(
        self,
        slot_id: int,
        is_booked: bool,
        expected: Optional[bool],
    ) -> Optional[TimeSlot]:
        """
        Atomically set the booking flag when it currently equals ``expected``.

        Issues a single ``UPDATE ... WHERE id = ? AND is_booked = ?`` so two
        concurrent callers cannot both win. Returns the updated slot, or
        ``None`` when no row matched (missing slot or flag not as expected).
        ``expected=None`` drops the flag condition.
        """
        stmt = update(TimeSlotRecord).where(TimeSlotRecord.id == slot_id)
        if expected is not None:
            stmt = stmt.where(TimeSlotRecord.is_booked == expected)
        stmt = stmt.values(is_booked=is_booked)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt, execution_options=_NO_SYNC)
                if result.rowcount == 0:
                    await session.rollback()
                    return None
                await session.commit()
                record = await session.get(TimeSlotRecord, slot_id, populate_existing=True)
                return self._to_domain(record) if record is not None else None
        except SQLAlchemyError as exc:
            raise self._storage_error(
                f"Failed to update booking status for slot {slot_id}", exc
            ) from exc

    async def delete(self, slot_id: int) -> bool:
        """Delete a slot. Returns whether a row was removed."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(TimeSlotRecord).where(TimeSlotRecord.id == slot_id),
                    execution_options=_NO_SYNC,
                )
                await session.commit()
                return result.rowcount > 0
        except SQLAlchemyError as exc:
            raise self._storage_error(f"Failed to delete slot {slot_id}", exc) from exc

    async def clear(self) -> int:
        """Delete every slot and return how many were removed."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(delete(TimeSlotRecord), execution_options=_NO_SYNC)
                await session.commit()
                return result.rowcount
        except SQLAlchemyError as exc:
            raise self._storage_error("Failed to clear slots", exc) from exc

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(func.count()).select_from(TimeSlotRecord))
                return result.scalar_one()
        except SQLAlchemyError as exc:
            raise self._storage_error("Failed to count slots", exc) from exc

    async def _insert(self, record: TimeSlotRecord, failure_message: str) -> TimeSlot:
        try:
            async with self._session_factory() as session:
                session.add(record)
                await session.commit()
                # Pull the store-assigned id and timestamps
                await session.refresh(record)
                return self._to_domain(record)
        except SQLAlchemyError as exc:
            raise self._storage_error(failure_message, exc) from exc

    @staticmethod
    def _storage_error(message: str, exc: SQLAlchemyError) -> StorageError:
        logger.error("%s: %s", message, exc)
        return StorageError(message, exc)

    @staticmethod
    def _to_domain(record: TimeSlotRecord) -> TimeSlot:
        slot_type = SlotType(record.type)

        if slot_type is SlotType.WEEKLY:
            schedule = WeeklySchedule(
                day_of_week=record.day_of_week,
                start_time=record.start_time,
                end_time=record.end_time,
            )
        elif slot_type is SlotType.FLEXIBLE:
            schedule = FlexibleSchedule(
                date=record.date,
                start_time=record.start_time,
                end_time=record.end_time,
            )
        else:
            schedule = DayOnlySchedule(date=record.date)

        return TimeSlot(
            id=record.id,
            schedule=schedule,
            is_booked=bool(record.is_booked),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
