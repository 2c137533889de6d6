"""
Input validation for slot creation.

All checks raise ``ValidationError`` and run before anything touches the store.
"""

import re

import pendulum

from .exceptions import ValidationError
from .models import DayOnlySlotSpec, FlexibleSlotSpec, SlotSpec, WeeklySlotSpec

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def validate_day_of_week(value: int) -> None:
    """Day of week must be an int between 0 (Sunday) and 6 (Saturday)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("day_of_week must be an integer")
    if not 0 <= value <= 6:
        raise ValidationError("day_of_week must be between 0 (Sunday) and 6 (Saturday)")


def validate_date(value: str) -> None:
    """
    Validate a ``YYYY-MM-DD`` date.

    The shape check alone lets through dates like ``2024-02-30``, so the value
    is also parsed as a real calendar date.
    """
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ValidationError("Date must be in YYYY-MM-DD format")

    try:
        pendulum.from_format(value, "YYYY-MM-DD")
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")


def validate_time(value: str) -> None:
    """Validate a 24-hour ``HH:MM`` time (single-digit hours allowed)."""
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        raise ValidationError("Time must be in HH:MM format (24-hour)")


def time_to_minutes(value: str) -> int:
    """Convert a validated ``HH:MM`` string to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def normalize_time(value: str) -> str:
    """Zero-pad a validated time, e.g. ``9:05`` -> ``09:05``."""
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


def validate_time_range(start_time: str, end_time: str) -> None:
    if time_to_minutes(start_time) >= time_to_minutes(end_time):
        raise ValidationError("Start time must be before end time")


def validate_weekly(spec: WeeklySlotSpec) -> None:
    validate_day_of_week(spec.day_of_week)
    validate_time(spec.start_time)
    validate_time(spec.end_time)
    validate_time_range(spec.start_time, spec.end_time)


def validate_flexible(spec: FlexibleSlotSpec) -> None:
    validate_date(spec.date)
    validate_time(spec.start_time)
    validate_time(spec.end_time)
    validate_time_range(spec.start_time, spec.end_time)


def validate_day_only(spec: DayOnlySlotSpec) -> None:
    validate_date(spec.date)


def validate_spec(spec: SlotSpec) -> None:
    """Dispatch to the validator for the kind of ``spec``."""
    if isinstance(spec, WeeklySlotSpec):
        validate_weekly(spec)
    elif isinstance(spec, FlexibleSlotSpec):
        validate_flexible(spec)
    else:
        validate_day_only(spec)
