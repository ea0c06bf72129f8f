# offer_calendar/services/availability/calculator.py
"""
Day-range availability calculation.

Walks every UTC day in [from, to] and reports the free capacity left
after confirmed bookings.

Modes (CapacityPolicy.mode):
  per_timeslot → capacity − used per timeslot, folded by max (or sum)
  day_level    → one pool per day: day_limit − used
  hour_level   → one pool per UTC hour, best hour of the day

Days with nothing left are omitted, not reported as unavailable.
"""

from collections import Counter, defaultdict
from datetime import date

from ...schemas.calendar import AvailableDay
from .config import CapacityMode, CapacityPolicy, DayAggregation
from .models import Booking, DateRange, ResolvedTimeslot


def calculate_available_days(
    timeslots: list[ResolvedTimeslot],
    bookings: list[Booking] | tuple[Booking, ...],
    date_range: DateRange,
    policy: CapacityPolicy,
) -> list[AvailableDay]:
    """
    Calculate days with free capacity.

    Returns:
        AvailableDay entries in ascending date order. Empty list when
        there are no timeslots or the range is reversed.
    """
    if not timeslots or date_range.is_empty:
        return []

    capacities = {slot.timeslot_id: slot.capacity for slot in timeslots}
    bookings_by_day = group_bookings_by_day(bookings, capacities.keys())

    if policy.mode == CapacityMode.DAY_LEVEL:
        limit = policy.day_limit or sum(capacities.values())
    elif policy.mode == CapacityMode.HOUR_LEVEL:
        limit = policy.hour_limit or max(capacities.values())
    else:
        limit = 0

    available_days: list[AvailableDay] = []

    for day in date_range.days():
        day_bookings = bookings_by_day.get(day, [])

        if policy.mode == CapacityMode.DAY_LEVEL:
            remaining = limit - len(day_bookings)
        elif policy.mode == CapacityMode.HOUR_LEVEL:
            remaining = _hour_level_remaining(day_bookings, limit)
        else:
            remaining = _timeslot_remaining(day_bookings, capacities, policy.aggregation)

        if remaining > 0:
            available_days.append(AvailableDay(
                date=day.isoformat(),
                available=True,
                remaining_slots=remaining,
            ))

    return available_days


# ── Helpers ──────────────────────────────────────────────────────────────


def group_bookings_by_day(
    bookings: list[Booking] | tuple[Booking, ...],
    timeslot_ids,
) -> dict[date, list[Booking]]:
    """Group bookings of known timeslots by their UTC day."""
    known = set(timeslot_ids)
    grouped: dict[date, list[Booking]] = defaultdict(list)

    for booking in bookings:
        if booking.timeslot_id not in known:
            continue
        grouped[booking.day].append(booking)

    return dict(grouped)


def _timeslot_remaining(
    day_bookings: list[Booking],
    capacities: dict[int, int],
    aggregation: DayAggregation,
) -> int:
    used = Counter(booking.timeslot_id for booking in day_bookings)
    remaining = [
        capacity - used.get(timeslot_id, 0)
        for timeslot_id, capacity in capacities.items()
    ]

    if aggregation == DayAggregation.SUM:
        # Over-booked timeslots do not eat into the others
        return sum(max(value, 0) for value in remaining)
    return max(remaining)


def _hour_level_remaining(day_bookings: list[Booking], limit: int) -> int:
    used = Counter(booking.hour for booking in day_bookings)
    return max(limit - used.get(hour, 0) for hour in range(24))
