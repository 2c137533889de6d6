"""
Domain-specific exception hierarchy for slot booking.

Every error carries an ``ErrorKind`` tag so callers can branch on ``exc.kind``
as well as on the exception class.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_BOOKED = "already_booked"
    NOT_BOOKED = "not_booked"
    VALIDATION = "validation"
    STORAGE = "storage"


class TimeSlotError(Exception):
    """Base class for all slot booking errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SlotNotFoundError(TimeSlotError):
    """Raised when no slot exists for the given id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, slot_id: int):
        super().__init__(f"Time slot with ID {slot_id} not found")
        self.slot_id = slot_id


class SlotAlreadyBookedError(TimeSlotError):
    """Raised when booking a slot that is already booked."""

    kind = ErrorKind.ALREADY_BOOKED

    def __init__(self, slot_id: int):
        super().__init__(f"Time slot with ID {slot_id} is already booked")
        self.slot_id = slot_id


class SlotNotBookedError(TimeSlotError):
    """Raised when cancelling a slot that is not booked."""

    kind = ErrorKind.NOT_BOOKED

    def __init__(self, slot_id: int):
        super().__init__(f"Time slot with ID {slot_id} is not booked")
        self.slot_id = slot_id


class ValidationError(TimeSlotError):
    """Raised when slot input is malformed. Never reaches the store."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(f"Validation error: {message}")


class StorageError(TimeSlotError):
    """Raised when the underlying store fails; ``cause`` keeps the original error."""

    kind = ErrorKind.STORAGE

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Storage error: {message}")
        self.cause = cause
