# offer_calendar/services/availability/config.py
"""
Capacity policy for availability calculation.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from ...config import get_settings


class CapacityMode(str, Enum):
    """
    How a day's free capacity is counted.

    - per_timeslot: every timeslot has its own capacity
    - day_level:    one shared pool per calendar day
    - hour_level:   one shared pool per UTC hour
    """
    PER_TIMESLOT = "per_timeslot"
    DAY_LEVEL = "day_level"
    HOUR_LEVEL = "hour_level"


class DayAggregation(str, Enum):
    """How per-timeslot remaining capacity folds into one figure per day."""
    MAX = "max"
    SUM = "sum"


@dataclass(frozen=True)
class CapacityPolicy:
    """
    Capacity rules applied to one calculation.

    Attributes:
        default_capacity: Fallback for timeslots without override/capacity
        mode: Capacity counting mode
        aggregation: Day figure in per_timeslot mode (max / sum)
        day_limit: Pool size for day_level mode (None = sum of capacities)
        hour_limit: Pool size for hour_level mode (None = largest capacity)
        confirmed_status: Booking status that consumes capacity
    """
    default_capacity: int = 1
    mode: CapacityMode = CapacityMode.PER_TIMESLOT
    aggregation: DayAggregation = DayAggregation.MAX
    day_limit: int | None = None
    hour_limit: int | None = None
    confirmed_status: str = "confirmed"

    def __post_init__(self):
        """Validate and normalize policy values."""
        # Enums accept their plain string values too
        object.__setattr__(self, "mode", CapacityMode(self.mode))
        object.__setattr__(self, "aggregation", DayAggregation(self.aggregation))
        object.__setattr__(
            self, "confirmed_status", self.confirmed_status.strip().lower()
        )

        if self.default_capacity < 1:
            raise ValueError(f"default_capacity must be positive, got {self.default_capacity}")
        if self.day_limit is not None and self.day_limit < 1:
            raise ValueError(f"day_limit must be positive, got {self.day_limit}")
        if self.hour_limit is not None and self.hour_limit < 1:
            raise ValueError(f"hour_limit must be positive, got {self.hour_limit}")
        if not self.confirmed_status:
            raise ValueError("confirmed_status must not be empty")


@lru_cache
def get_capacity_policy() -> CapacityPolicy:
    """
    Get capacity policy (singleton).

    Built from OFFER_CALENDAR_* settings.
    """
    settings = get_settings()
    return CapacityPolicy(
        default_capacity=settings.default_capacity,
        mode=settings.capacity_mode,
        aggregation=settings.day_aggregation,
        day_limit=settings.day_limit,
        hour_limit=settings.hour_limit,
        confirmed_status=settings.confirmed_status,
    )
