"""
Service layer - booking rules on top of the repository.
"""

from .booking_service import TimeSlotService, TimeSlotStore
from .seeding import SeedSummary, build_seed_plan, seed_database

__all__ = ["SeedSummary", "TimeSlotService", "TimeSlotStore", "build_seed_plan", "seed_database"]
