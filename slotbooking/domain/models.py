"""
Domain models for bookable time slots.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class SlotType(str, Enum):
    WEEKLY = "WEEKLY"
    FLEXIBLE = "FLEXIBLE"
    DAY_ONLY = "DAY_ONLY"


WEEKDAY_NAMES = {
    0: "Sunday",
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
}


@dataclass(frozen=True)
class WeeklySchedule:
    """Recurs every week on ``day_of_week`` (0 = Sunday, 6 = Saturday)."""
    day_of_week: int
    start_time: str
    end_time: str

    @property
    def type(self) -> SlotType:
        return SlotType.WEEKLY


@dataclass(frozen=True)
class FlexibleSchedule:
    """One-off slot on a specific date with a time range."""
    date: str
    start_time: str
    end_time: str

    @property
    def type(self) -> SlotType:
        return SlotType.FLEXIBLE


@dataclass(frozen=True)
class DayOnlySchedule:
    """One-off slot covering a whole date."""
    date: str

    @property
    def type(self) -> SlotType:
        return SlotType.DAY_ONLY


Schedule = Union[WeeklySchedule, FlexibleSchedule, DayOnlySchedule]


@dataclass(frozen=True)
class TimeSlot:
    """
    A stored slot.

    The kind-specific fields live on ``schedule``; the flat accessors below
    return ``None`` for fields the kind does not have.
    """
    id: int
    schedule: Schedule
    is_booked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def type(self) -> SlotType:
        return self.schedule.type

    @property
    def day_of_week(self) -> Optional[int]:
        return getattr(self.schedule, "day_of_week", None)

    @property
    def date(self) -> Optional[str]:
        return getattr(self.schedule, "date", None)

    @property
    def start_time(self) -> Optional[str]:
        return getattr(self.schedule, "start_time", None)

    @property
    def end_time(self) -> Optional[str]:
        return getattr(self.schedule, "end_time", None)

    def format_display(self) -> str:
        """
        Format the slot for display.

        Examples: ``Monday 09:00 - 10:00``, ``2024-01-15 14:00 - 15:00``,
        ``2024-01-15 (all day)``.
        """
        schedule = self.schedule
        if isinstance(schedule, WeeklySchedule):
            when = f"{WEEKDAY_NAMES[schedule.day_of_week]} {schedule.start_time} - {schedule.end_time}"
        elif isinstance(schedule, FlexibleSchedule):
            when = f"{schedule.date} {schedule.start_time} - {schedule.end_time}"
        else:
            when = f"{schedule.date} (all day)"
        return when


# Creation inputs

@dataclass(frozen=True)
class WeeklySlotSpec:
    day_of_week: int
    start_time: str
    end_time: str


@dataclass(frozen=True)
class FlexibleSlotSpec:
    date: str
    start_time: str
    end_time: str


@dataclass(frozen=True)
class DayOnlySlotSpec:
    date: str


SlotSpec = Union[WeeklySlotSpec, FlexibleSlotSpec, DayOnlySlotSpec]


@dataclass(frozen=True)
class SlotFilter:
    """Optional equality filters for listing slots. ``None`` means "any"."""
    type: Optional[SlotType] = None
    is_booked: Optional[bool] = None
    day_of_week: Optional[int] = None
    date: Optional[str] = None


@dataclass(frozen=True)
class BookingResult:
    success: bool
    slot: Optional[TimeSlot] = None
    message: Optional[str] = None
