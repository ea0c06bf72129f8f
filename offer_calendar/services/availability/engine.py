# offer_calendar/services/availability/engine.py
"""
Offer calendar entry point.

Normalizer → Capacity resolver → Day-range calculator → CalendarReport

The caller supplies already-fetched timeslots and bookings; nothing here
does I/O or keeps state between calls.
"""

import logging
from collections.abc import Mapping

from ...schemas.calendar import CalendarReport, CalendarRequest
from .calculator import calculate_available_days
from .capacity import resolve_capacities, resolve_default_capacity
from .config import CapacityPolicy, get_capacity_policy
from .normalizer import normalize_request

logger = logging.getLogger(__name__)


def compute_available_days(
    payload: Mapping | CalendarRequest | None,
    policy: CapacityPolicy | None = None,
) -> CalendarReport:
    """
    Compute the availability report for an offer.

    Args:
        payload: {timeslots, bookings, from, to, default_capacity?}
        policy: Capacity rules, defaults to the configured policy

    Returns:
        CalendarReport; empty when the range cannot be resolved or no
        active timeslot has positive capacity.
    """
    policy = policy or get_capacity_policy()

    normalized = normalize_request(payload, policy.confirmed_status)
    if normalized.is_empty:
        return CalendarReport()

    default_capacity = resolve_default_capacity(normalized, policy)
    timeslots = resolve_capacities(normalized.timeslots, default_capacity)
    if not timeslots:
        return CalendarReport()

    available_days = calculate_available_days(
        timeslots,
        normalized.bookings,
        normalized.date_range,
        policy,
    )

    logger.info(
        f"Calendar {normalized.date_range.start.isoformat()}..{normalized.date_range.end.isoformat()}: "
        f"{len(timeslots)} timeslots, {len(normalized.bookings)} bookings, "
        f"{len(available_days)} available days ({policy.mode.value})"
    )

    return CalendarReport(available_days=available_days)
