"""FastAPI dependencies for injection into route handlers.

Overridable through app.dependency_overrides, e.g. to run the API against a
different fallback schedule in tests.
"""

from teesheet.core.config import settings
from teesheet.models import ScheduleConfig
from teesheet.services.defaults import default_schedule_config


def get_default_config() -> ScheduleConfig:
    """Schedule used when a request carries no config of its own."""
    return default_schedule_config()


def get_slot_options() -> dict:
    """Slot generation limits taken from settings."""
    return {
        "max_slots": settings.max_slots_per_day,
        "fallback_interval": settings.fallback_interval_minutes,
        "strict": settings.strict_slot_limit,
        "players_per_flight": settings.players_per_flight,
    }
