# offer_calendar/services/availability/capacity.py
"""
Effective capacity resolution.

Rule: first positive value wins, per timeslot:
  capacity_override → capacity → default

Default itself resolves as:
  request default_capacity → booking metadata default_capacity → policy default (1)
"""

import logging
import math

from .config import CapacityPolicy
from .models import NormalizedInput, ResolvedTimeslot, Timeslot

logger = logging.getLogger(__name__)


def resolve_default_capacity(
    normalized: NormalizedInput,
    policy: CapacityPolicy,
) -> int:
    """Pick the capacity applied to timeslots without their own."""
    for candidate in (
        normalized.default_capacity,
        normalized.metadata_capacity,
        policy.default_capacity,
    ):
        if _is_positive(candidate):
            return int(candidate)
    return 1


def resolve_capacity(timeslot: Timeslot, default_capacity: int) -> int | None:
    """
    Effective capacity of one timeslot.

    Returns:
        Positive int, or None when the timeslot is inactive or
        no positive capacity can be resolved.
    """
    if timeslot.active is not True:
        return None

    for candidate in (timeslot.capacity_override, timeslot.capacity, default_capacity):
        if _is_positive(candidate):
            return int(candidate)
    return None


def resolve_capacities(
    timeslots: tuple[Timeslot, ...] | list[Timeslot],
    default_capacity: int,
) -> list[ResolvedTimeslot]:
    """
    Resolve every active timeslot.

    Timeslots without positive capacity are dropped. A repeated
    timeslot_id keeps its first definition.
    """
    resolved: list[ResolvedTimeslot] = []
    seen: set[int] = set()

    for timeslot in timeslots:
        if timeslot.timeslot_id in seen:
            logger.debug(f"Duplicate timeslot {timeslot.timeslot_id} ignored")
            continue

        capacity = resolve_capacity(timeslot, default_capacity)
        if capacity is None:
            logger.debug(f"Timeslot {timeslot.timeslot_id} has no capacity, dropped")
            continue

        seen.add(timeslot.timeslot_id)
        resolved.append(ResolvedTimeslot(timeslot_id=timeslot.timeslot_id, capacity=capacity))

    return resolved


def _is_positive(value) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value > 0
