"""
Domain layer - slot models, validation rules and errors. No storage access.
"""

from .exceptions import (
    ErrorKind,
    SlotAlreadyBookedError,
    SlotNotBookedError,
    SlotNotFoundError,
    StorageError,
    TimeSlotError,
    ValidationError,
)
from .models import (
    BookingResult,
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

__all__ = [
    "BookingResult",
    "DayOnlySchedule",
    "DayOnlySlotSpec",
    "ErrorKind",
    "FlexibleSchedule",
    "FlexibleSlotSpec",
    "SlotAlreadyBookedError",
    "SlotFilter",
    "SlotNotBookedError",
    "SlotNotFoundError",
    "SlotType",
    "StorageError",
    "TimeSlot",
    "TimeSlotError",
    "ValidationError",
    "WeeklySchedule",
    "WeeklySlotSpec",
]
