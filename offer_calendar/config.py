# offer_calendar/config.py

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    default_capacity: int = 1
    capacity_mode: str = "per_timeslot"
    day_aggregation: str = "max"
    day_limit: int | None = None
    hour_limit: int | None = None
    confirmed_status: str = "confirmed"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="OFFER_CALENDAR_",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
