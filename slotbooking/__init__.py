"""
slotbooking - bookable weekly, flexible and day-only time slots.
"""

from .domain.exceptions import (
    ErrorKind,
    SlotAlreadyBookedError,
    SlotNotBookedError,
    SlotNotFoundError,
    StorageError,
    TimeSlotError,
    ValidationError,
)
from .domain.models import BookingResult, SlotFilter, SlotType, TimeSlot
from .services.booking_service import TimeSlotService

__version__ = "0.1.0"

__all__ = [
    "BookingResult",
    "ErrorKind",
    "SlotAlreadyBookedError",
    "SlotFilter",
    "SlotNotBookedError",
    "SlotNotFoundError",
    "SlotType",
    "StorageError",
    "TimeSlot",
    "TimeSlotError",
    "TimeSlotService",
    "ValidationError",
    "__version__",
]
