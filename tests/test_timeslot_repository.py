"""
Tests for TimeSlotRepository against an in-memory SQLite database.
"""

import pytest

from slotbooking.adapters.database import drop_db
from slotbooking.domain.exceptions import StorageError, ValidationError
from slotbooking.domain.models import (
    DayOnlySlotSpec,
    FlexibleSlotSpec,
    SlotFilter,
    SlotType,
    WeeklySlotSpec,
)


class TestCreate:
    """Tests for the three slot constructors."""

    def test_create_weekly(self, run_store):
        async def scenario(service, repository, engine):
            return await repository.create_weekly(
                WeeklySlotSpec(day_of_week=1, start_time="09:00", end_time="10:00")
            )

        slot = run_store(scenario)

        assert slot.id is not None
        assert slot.type is SlotType.WEEKLY
        assert slot.day_of_week == 1
        assert slot.date is None
        assert slot.is_booked is False
        assert slot.created_at is not None
        assert slot.updated_at is not None

    def test_create_flexible_pads_times(self, run_store):
        async def scenario(service, repository, engine):
            return await repository.create_flexible(
                FlexibleSlotSpec(date="2024-01-15", start_time="9:30", end_time="10:15")
            )

        slot = run_store(scenario)

        assert slot.type is SlotType.FLEXIBLE
        assert slot.date == "2024-01-15"
        assert slot.start_time == "09:30"
        assert slot.end_time == "10:15"

    def test_create_day_only(self, run_store):
        async def scenario(service, repository, engine):
            return await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))

        slot = run_store(scenario)

        assert slot.type is SlotType.DAY_ONLY
        assert slot.start_time is None
        assert slot.end_time is None

    def test_ids_are_unique(self, run_store):
        async def scenario(service, repository, engine):
            first = await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            second = await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            return first, second

        first, second = run_store(scenario)

        assert first.id != second.id

    def test_validation_fails_before_insert(self, run_store):
        """Invalid input never produces a row."""
        async def scenario(service, repository, engine):
            with pytest.raises(ValidationError):
                await repository.create_weekly(
                    WeeklySlotSpec(day_of_week=7, start_time="09:00", end_time="10:00")
                )
            with pytest.raises(ValidationError):
                await repository.create_flexible(
                    FlexibleSlotSpec(date="2024-02-30", start_time="09:00", end_time="10:00")
                )
            return await repository.count()

        assert run_store(scenario) == 0


class TestFindAndList:

    def test_find_by_id(self, run_store):
        async def scenario(service, repository, engine):
            created = await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            return created, await repository.find_by_id(created.id), await repository.find_by_id(999)

        created, found, missing = run_store(scenario)

        assert found == created
        assert missing is None

    def test_list_orders_by_date(self, run_store):
        async def scenario(service, repository, engine):
            for date in ["2024-01-03", "2024-01-01", "2024-01-02"]:
                await repository.create_flexible(
                    FlexibleSlotSpec(date=date, start_time="10:00", end_time="11:00")
                )
            return await repository.list_all()

        slots = run_store(scenario)

        assert [slot.date for slot in slots] == ["2024-01-01", "2024-01-02", "2024-01-03"]

    def test_list_orders_by_start_time_within_date(self, run_store):
        """Single-digit hours are padded, so 9:00 comes before 14:00."""
        async def scenario(service, repository, engine):
            await repository.create_flexible(
                FlexibleSlotSpec(date="2024-01-01", start_time="14:00", end_time="15:00")
            )
            await repository.create_flexible(
                FlexibleSlotSpec(date="2024-01-01", start_time="9:00", end_time="10:00")
            )
            return await repository.list_all()

        slots = run_store(scenario)

        assert [slot.start_time for slot in slots] == ["09:00", "14:00"]

    def test_undated_slots_come_last(self, run_store):
        async def scenario(service, repository, engine):
            await repository.create_weekly(
                WeeklySlotSpec(day_of_week=1, start_time="08:00", end_time="09:00")
            )
            await repository.create_day_only(DayOnlySlotSpec(date="2024-01-01"))
            return await repository.list_all()

        slots = run_store(scenario)

        assert [slot.type for slot in slots] == [SlotType.DAY_ONLY, SlotType.WEEKLY]

    def test_list_filters(self, run_store):
        async def scenario(service, repository, engine):
            monday = await repository.create_weekly(
                WeeklySlotSpec(day_of_week=1, start_time="09:00", end_time="10:00")
            )
            await repository.create_weekly(
                WeeklySlotSpec(day_of_week=2, start_time="09:00", end_time="10:00")
            )
            await repository.create_flexible(
                FlexibleSlotSpec(date="2024-01-15", start_time="09:00", end_time="10:00")
            )
            day = await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            await repository.update_booking_status(day.id, True)

            return {
                "weekly": await repository.list_all(SlotFilter(type=SlotType.WEEKLY)),
                "monday": await repository.list_all(SlotFilter(day_of_week=1)),
                "date": await repository.list_all(SlotFilter(date="2024-01-15")),
                "booked": await repository.list_all(SlotFilter(is_booked=True)),
                "free_on_date": await repository.list_all(SlotFilter(date="2024-01-15", is_booked=False)),
                "monday_id": monday.id,
                "day_id": day.id,
            }

        result = run_store(scenario)

        assert len(result["weekly"]) == 2
        assert [slot.id for slot in result["monday"]] == [result["monday_id"]]
        assert len(result["date"]) == 2
        assert [slot.id for slot in result["booked"]] == [result["day_id"]]
        assert [slot.type for slot in result["free_on_date"]] == [SlotType.FLEXIBLE]


class TestUpdateAndDelete:

    def test_update_booking_status(self, run_store):
        async def scenario(service, repository, engine):
            slot = await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            booked = await repository.update_booking_status(slot.id, True)
            missing = await repository.update_booking_status(999, True)
            return booked, missing

        booked, missing = run_store(scenario)

        assert booked.is_booked is True
        assert missing is None

    def test_set_booked_if_only_matches_expected_state(self, run_store):
        async def scenario(service, repository, engine):
            slot = await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            first = await repository.set_booked_if(slot.id, True, expected=False)
            second = await repository.set_booked_if(slot.id, True, expected=False)
            stored = await repository.find_by_id(slot.id)
            return first, second, stored

        first, second, stored = run_store(scenario)

        assert first is not None and first.is_booked is True
        assert second is None
        assert stored.is_booked is True

    def test_delete(self, run_store):
        async def scenario(service, repository, engine):
            slot = await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            deleted = await repository.delete(slot.id)
            deleted_again = await repository.delete(slot.id)
            return deleted, deleted_again, await repository.find_by_id(slot.id)

        deleted, deleted_again, found = run_store(scenario)

        assert deleted is True
        assert deleted_again is False
        assert found is None

    def test_clear(self, run_store):
        async def scenario(service, repository, engine):
            await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))
            await repository.create_day_only(DayOnlySlotSpec(date="2024-01-16"))
            removed = await repository.clear()
            return removed, await repository.count()

        assert run_store(scenario) == (2, 0)


class TestStorageFailures:
    """Failures inside SQLAlchemy surface as StorageError with the cause attached."""

    def test_missing_table_is_wrapped(self, run_store):
        async def scenario(service, repository, engine):
            await drop_db(engine)
            with pytest.raises(StorageError) as exc_info:
                await repository.list_all()
            return exc_info.value

        error = run_store(scenario)

        assert error.cause is not None
        assert error.__cause__ is error.cause
        assert "Failed to list slots" in str(error)

    def test_insert_failure_is_wrapped(self, run_store):
        async def scenario(service, repository, engine):
            await drop_db(engine)
            with pytest.raises(StorageError, match="Failed to create day-only slot"):
                await repository.create_day_only(DayOnlySlotSpec(date="2024-01-15"))

        run_store(scenario)
