"""
Demonstration data: a working week of hourly weekly slots, a week of flexible
slots and a week of day-only slots after that.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

import pendulum
from pendulum import Date

from ..config import SeedConfig
from ..domain.models import (
    DayOnlySlotSpec,
    FlexibleSlotSpec,
    SlotSpec,
    WeeklySlotSpec,
)
from ..domain.validation import validate_spec
from .booking_service import TimeSlotService

logger = logging.getLogger(__name__)


class ClearableStore(Protocol):
    """The part of the repository seeding needs besides the service."""

    async def clear(self) -> int: ...


@dataclass
class SeedSummary:
    removed: int
    weekly: int
    flexible: int
    day_only: int

    @property
    def total(self) -> int:
        return self.weekly + self.flexible + self.day_only


def build_seed_plan(today: Date, config: Optional[SeedConfig] = None) -> List[SlotSpec]:
    """
    Build the slot specs for the demonstration data.

    Flexible slots fall on the ``flexible_days`` days after ``today``; day-only
    slots start ``day_only_offset`` days after ``today``.
    """
    config = config or SeedConfig()
    plan: List[SlotSpec] = []

    for day in config.weekdays:
        for hour in range(config.start_hour, config.end_hour):
            plan.append(
                WeeklySlotSpec(
                    day_of_week=day,
                    start_time=f"{hour:02d}:00",
                    end_time=f"{hour + 1:02d}:00",
                )
            )

    for offset in range(1, config.flexible_days + 1):
        date_str = today.add(days=offset).to_date_string()
        for start, end in config.flexible_windows:
            plan.append(FlexibleSlotSpec(date=date_str, start_time=start, end_time=end))

    for offset in range(config.day_only_offset, config.day_only_offset + config.day_only_days):
        plan.append(DayOnlySlotSpec(date=today.add(days=offset).to_date_string()))

    return plan


async def seed_database(
    service: TimeSlotService,
    repository: ClearableStore,
    today: Optional[Date] = None,
    config: Optional[SeedConfig] = None,
    clear: bool = True,
) -> SeedSummary:
    """
    Write the demonstration data through ``service``.

    Existing rows are removed first unless ``clear`` is False. The whole plan
    is validated before anything is removed or written.
    """
    today = today or pendulum.today().date()
    plan = build_seed_plan(today, config)
    for spec in plan:
        validate_spec(spec)

    removed = await repository.clear() if clear else 0
    if removed:
        logger.info("Removed %d existing slots", removed)

    summary = SeedSummary(removed=removed, weekly=0, flexible=0, day_only=0)

    for spec in plan:
        if isinstance(spec, WeeklySlotSpec):
            await service.create_weekly(spec.day_of_week, spec.start_time, spec.end_time)
            summary.weekly += 1
        elif isinstance(spec, FlexibleSlotSpec):
            await service.create_flexible(spec.date, spec.start_time, spec.end_time)
            summary.flexible += 1
        else:
            await service.create_day_only(spec.date)
            summary.day_only += 1

    logger.info(
        "Seeded %d weekly, %d flexible and %d day-only slots",
        summary.weekly,
        summary.flexible,
        summary.day_only,
    )
    return summary
