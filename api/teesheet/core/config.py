"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings

from teesheet.services.slot_generator import (
    FALLBACK_INTERVAL_MINUTES,
    MAX_PREVIEW_DAYS,
    MAX_SLOTS,
    PLAYERS_PER_FLIGHT,
)


class Settings(BaseSettings):
    # App
    app_name: str = "TeeSheet"
    debug: bool = True
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Slot generation
    max_slots_per_day: int = MAX_SLOTS  # hard stop against a runaway interval
    fallback_interval_minutes: int = FALLBACK_INTERVAL_MINUTES  # cadence when no time period covers a minute
    players_per_flight: int = PLAYERS_PER_FLIGHT
    strict_slot_limit: bool = True  # raise instead of silently truncating at the cap

    # Range previews (week / month views)
    max_preview_days: int = MAX_PREVIEW_DAYS

    model_config = {"env_prefix": "TS_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
