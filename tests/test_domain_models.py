"""
Tests for domain models and errors.
"""

import pytest

from slotbooking.domain.exceptions import (
    ErrorKind,
    SlotAlreadyBookedError,
    SlotNotBookedError,
    SlotNotFoundError,
    StorageError,
    TimeSlotError,
    ValidationError,
)
from slotbooking.domain.models import (
    DayOnlySchedule,
    FlexibleSchedule,
    SlotType,
    TimeSlot,
    WeeklySchedule,
)


class TestTimeSlot:
    """Tests for the per-kind accessors of TimeSlot."""

    def test_weekly_slot_has_no_date(self):
        slot = TimeSlot(id=1, schedule=WeeklySchedule(day_of_week=1, start_time="09:00", end_time="10:00"))

        assert slot.type is SlotType.WEEKLY
        assert slot.day_of_week == 1
        assert slot.date is None
        assert slot.start_time == "09:00"
        assert slot.end_time == "10:00"
        assert slot.is_booked is False

    def test_flexible_slot_has_no_day_of_week(self):
        slot = TimeSlot(id=2, schedule=FlexibleSchedule(date="2024-01-15", start_time="14:00", end_time="15:00"))

        assert slot.type is SlotType.FLEXIBLE
        assert slot.day_of_week is None
        assert slot.date == "2024-01-15"

    def test_day_only_slot_has_no_times(self):
        slot = TimeSlot(id=3, schedule=DayOnlySchedule(date="2024-01-15"))

        assert slot.type is SlotType.DAY_ONLY
        assert slot.start_time is None
        assert slot.end_time is None
        assert slot.day_of_week is None

    def test_format_display(self):
        weekly = TimeSlot(id=1, schedule=WeeklySchedule(day_of_week=0, start_time="09:00", end_time="10:00"))
        flexible = TimeSlot(id=2, schedule=FlexibleSchedule(date="2024-01-15", start_time="14:00", end_time="15:00"))
        day_only = TimeSlot(id=3, schedule=DayOnlySchedule(date="2024-01-15"))

        assert weekly.format_display() == "Sunday 09:00 - 10:00"
        assert flexible.format_display() == "2024-01-15 14:00 - 15:00"
        assert day_only.format_display() == "2024-01-15 (all day)"


class TestErrors:
    """Every error kind is distinct, tagged and catchable through the base class."""

    @pytest.mark.parametrize(
        "error, kind",
        [
            (SlotNotFoundError(5), ErrorKind.NOT_FOUND),
            (SlotAlreadyBookedError(5), ErrorKind.ALREADY_BOOKED),
            (SlotNotBookedError(5), ErrorKind.NOT_BOOKED),
            (ValidationError("bad"), ErrorKind.VALIDATION),
            (StorageError("down"), ErrorKind.STORAGE),
        ],
    )
    def test_kind_tags(self, error, kind):
        assert isinstance(error, TimeSlotError)
        assert error.kind is kind

    def test_messages(self):
        assert str(SlotNotFoundError(5)) == "Time slot with ID 5 not found"
        assert str(SlotAlreadyBookedError(5)) == "Time slot with ID 5 is already booked"
        assert str(SlotNotBookedError(5)) == "Time slot with ID 5 is not booked"
        assert str(ValidationError("bad input")) == "Validation error: bad input"

    def test_storage_error_keeps_cause(self):
        cause = RuntimeError("connection refused")
        error = StorageError("Failed to list slots", cause)

        assert error.cause is cause
        assert "Failed to list slots" in str(error)
