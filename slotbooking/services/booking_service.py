"""
Application service for creating, booking and cancelling time slots.

The service owns the booking state machine (available <-> booked) and
delegates storage to a repository matching ``TimeSlotStore``. Booking and
cancelling use the repository's conditional write, so the state check and the
update happen in one statement.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Protocol

from ..domain.exceptions import (
    SlotAlreadyBookedError,
    SlotNotBookedError,
    SlotNotFoundError,
)
from ..domain.models import (
    BookingResult,
    DayOnlySlotSpec,
    FlexibleSlotSpec,
    SlotFilter,
    TimeSlot,
    WeeklySlotSpec,
)

logger = logging.getLogger(__name__)


class TimeSlotStore(Protocol):
    """Protocol describing the repository behaviour needed by the service."""

    async def create_weekly(self, spec: WeeklySlotSpec) -> TimeSlot: ...

    async def create_flexible(self, spec: FlexibleSlotSpec) -> TimeSlot: ...

    async def create_day_only(self, spec: DayOnlySlotSpec) -> TimeSlot: ...

    async def find_by_id(self, slot_id: int) -> Optional[TimeSlot]: ...

    async def list_all(self, slot_filter: Optional[SlotFilter] = None) -> List[TimeSlot]: ...

    async def set_booked_if(
        self, slot_id: int, is_booked: bool, expected: Optional[bool]
    ) -> Optional[TimeSlot]: ...

    async def delete(self, slot_id: int) -> bool: ...


class TimeSlotService:
    """
    Public operations on time slots.

    Dependency inversion toward ``TimeSlotStore`` lets tests plug in stubs
    or a repository bound to an in-memory database.
    """

    def __init__(self, repository: TimeSlotStore) -> None:
        self._repository = repository

    async def create_weekly(self, day_of_week: int, start_time: str, end_time: str) -> TimeSlot:
        """
        Create a weekly recurring slot.

        Args:
            day_of_week: 0 = Sunday .. 6 = Saturday
            start_time: Start time in HH:MM format
            end_time: End time in HH:MM format
        """
        slot = await self._repository.create_weekly(
            WeeklySlotSpec(day_of_week=day_of_week, start_time=start_time, end_time=end_time)
        )
        logger.info("Created weekly slot %s (%s)", slot.id, slot.format_display())
        return slot

    async def create_flexible(self, date: str, start_time: str, end_time: str) -> TimeSlot:
        """
        Create a one-off slot.

        Args:
            date: Date in YYYY-MM-DD format
            start_time: Start time in HH:MM format
            end_time: End time in HH:MM format
        """
        slot = await self._repository.create_flexible(
            FlexibleSlotSpec(date=date, start_time=start_time, end_time=end_time)
        )
        logger.info("Created flexible slot %s (%s)", slot.id, slot.format_display())
        return slot

    async def create_day_only(self, date: str) -> TimeSlot:
        """Create a whole-day slot on ``date`` (YYYY-MM-DD)."""
        slot = await self._repository.create_day_only(DayOnlySlotSpec(date=date))
        logger.info("Created day-only slot %s (%s)", slot.id, slot.format_display())
        return slot

    async def list_all(self, slot_filter: Optional[SlotFilter] = None) -> List[TimeSlot]:
        return await self._repository.list_all(slot_filter)

    async def list_available(self, slot_filter: Optional[SlotFilter] = None) -> List[TimeSlot]:
        """List slots that are not booked; any ``is_booked`` in the filter is overridden."""
        return await self._repository.list_all(
            replace(slot_filter or SlotFilter(), is_booked=False)
        )

    async def list_booked(self, slot_filter: Optional[SlotFilter] = None) -> List[TimeSlot]:
        """List booked slots; any ``is_booked`` in the filter is overridden."""
        return await self._repository.list_all(
            replace(slot_filter or SlotFilter(), is_booked=True)
        )

    async def get_by_id(self, slot_id: int) -> TimeSlot:
        slot = await self._repository.find_by_id(slot_id)
        if slot is None:
            raise SlotNotFoundError(slot_id)
        return slot

    async def book(self, slot_id: int) -> BookingResult:
        """
        Book an available slot.

        Raises:
            SlotNotFoundError: If the slot does not exist
            SlotAlreadyBookedError: If the slot is already booked
        """
        slot = await self._repository.set_booked_if(slot_id, True, expected=False)

        if slot is None:
            # The conditional write matched nothing; find out why
            await self.get_by_id(slot_id)
            logger.debug("Rejected booking of slot %s: already booked", slot_id)
            raise SlotAlreadyBookedError(slot_id)

        logger.info("Booked slot %s", slot_id)
        return BookingResult(success=True, slot=slot, message="Slot booked successfully")

    async def cancel(self, slot_id: int) -> BookingResult:
        """
        Cancel the booking of a slot.

        Raises:
            SlotNotFoundError: If the slot does not exist
            SlotNotBookedError: If the slot is not booked
        """
        slot = await self._repository.set_booked_if(slot_id, False, expected=True)

        if slot is None:
            await self.get_by_id(slot_id)
            logger.debug("Rejected cancellation of slot %s: not booked", slot_id)
            raise SlotNotBookedError(slot_id)

        logger.info("Cancelled booking of slot %s", slot_id)
        return BookingResult(success=True, slot=slot, message="Booking cancelled successfully")

    async def delete(self, slot_id: int) -> None:
        """Delete a slot permanently, booked or not."""
        await self.get_by_id(slot_id)

        if not await self._repository.delete(slot_id):
            # Removed by someone else between the lookup and the delete
            raise SlotNotFoundError(slot_id)

        logger.info("Deleted slot %s", slot_id)
