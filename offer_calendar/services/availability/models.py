# offer_calendar/services/availability/models.py
"""
Canonical records produced by the normalizer.

Everything downstream of normalization works on these types only:
ids are positive ints, instants are UTC datetimes, statuses are lower-case.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone


@dataclass(frozen=True)
class Timeslot:
    """Active timeslot definition of an offer."""
    timeslot_id: int
    active: bool = True
    capacity_override: int | None = None
    capacity: int | None = None


@dataclass(frozen=True)
class ResolvedTimeslot:
    """Active timeslot with its effective per-day capacity."""
    timeslot_id: int
    capacity: int


@dataclass(frozen=True)
class Booking:
    """Booking consuming one unit of capacity of one timeslot."""
    timeslot_id: int
    status: str
    instant: datetime

    @property
    def day(self) -> date:
        return self.instant.date()

    @property
    def hour(self) -> int:
        return self.instant.hour


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of UTC calendar days."""
    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def contains(self, instant: datetime) -> bool:
        """True when the UTC instant falls in [start 00:00, end 00:00 + 24h)."""
        return self.start <= instant.astimezone(timezone.utc).date() <= self.end

    def days(self) -> Iterator[date]:
        """Yield every day in [start, end]; nothing when reversed."""
        current = self.start
        while current <= self.end:
            yield current
            if current == date.max:
                return
            current += timedelta(days=1)


@dataclass(frozen=True)
class NormalizedInput:
    """Result of normalizing one request payload."""
    timeslots: tuple[Timeslot, ...] = ()
    bookings: tuple[Booking, ...] = ()
    date_range: DateRange | None = None
    default_capacity: int | None = None
    metadata_capacity: int | None = None
    skipped: dict[str, int] = field(default_factory=dict, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.timeslots or self.date_range is None
