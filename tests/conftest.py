"""
Shared helpers: every scenario runs against a fresh in-memory SQLite database.
"""

import asyncio

import pytest

from slotbooking.adapters.database import create_engine, create_session_factory, init_db
from slotbooking.adapters.timeslot_repository import TimeSlotRepository
from slotbooking.services.booking_service import TimeSlotService


def run_with_store(scenario):
    """
    Run ``scenario(service, repository, engine)`` inside one event loop.

    The engine is created and disposed within the same ``asyncio.run`` call.
    """
    async def runner():
        engine = create_engine("sqlite+aiosqlite://")
        try:
            await init_db(engine)
            repository = TimeSlotRepository(create_session_factory(engine))
            service = TimeSlotService(repository)
            return await scenario(service, repository, engine)
        finally:
            await engine.dispose()

    return asyncio.run(runner())


@pytest.fixture
def run_store():
    return run_with_store
