# offer_calendar/services/availability/__init__.py
"""
Offer availability module.

Normalizer:  loose payload → canonical records
Capacity:    effective capacity per active timeslot
Calculator:  free capacity per UTC day in the requested range
"""

from .config import CapacityMode, CapacityPolicy, DayAggregation, get_capacity_policy
from .normalizer import normalize_request
from .capacity import resolve_capacities, resolve_default_capacity
from .calculator import calculate_available_days
from .engine import compute_available_days

__all__ = [
    "CapacityMode",
    "CapacityPolicy",
    "DayAggregation",
    "get_capacity_policy",
    "normalize_request",
    "resolve_capacities",
    "resolve_default_capacity",
    "calculate_available_days",
    "compute_available_days",
]
