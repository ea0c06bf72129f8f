# offer_calendar/services/availability/normalizer.py
"""
Input normalization.

Turns a loosely typed payload into canonical records:
  timeslot_id  → positive int ("7", 7.0, 7)
  from / to    → UTC calendar day ("2026-01-01" or epoch milliseconds)
  timestamp    → UTC instant ("2026-01-01" or epoch milliseconds)
  status       → lower-case string

Rules:
✓ Malformed records are skipped, never raised
✓ Calendar-date strings must round-trip ("2026-04-31" is rejected)
✓ Only bookings inside [from 00:00Z, to 00:00Z + 24h) are kept
✗ Unresolvable from/to → empty bundle
"""

import logging
import math
import re
from collections import Counter
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from pydantic import ValidationError

from ...schemas.calendar import CalendarRequest
from .models import Booking, DateRange, NormalizedInput, Timeslot

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

CALENDAR_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Plain decimal numbers only: no exponent, no underscores
NUMBER_RE = re.compile(r"[-+]?\d+(\.\d+)?")

# YYYYMMDD is a compact calendar date, never epoch milliseconds
COMPACT_DATE_RE = re.compile(r"\d{8}")

# Booking keys holding the booked instant, first present wins
TIMESTAMP_KEYS = ("timestamp", "date", "booked_at")


def normalize_request(
    payload: Mapping | CalendarRequest | None,
    confirmed_status: str = "confirmed",
) -> NormalizedInput:
    """
    Normalize a request payload.

    Returns:
        NormalizedInput; empty (no timeslots, no range) when the
        payload or its date range cannot be resolved.
    """
    request = _as_request(payload)
    if request is None:
        return NormalizedInput()

    date_range = parse_date_range(request.date_from, request.date_to)
    if date_range is None:
        logger.debug(f"Unresolvable date range: from={request.date_from!r} to={request.date_to!r}")
        return NormalizedInput()

    skipped: Counter[str] = Counter()
    timeslots = _normalize_timeslots(request.timeslots, skipped)
    bookings = _normalize_bookings(
        request.bookings, date_range, confirmed_status.strip().lower(), skipped
    )

    if skipped:
        logger.debug(f"Skipped records: {dict(skipped)}")

    return NormalizedInput(
        timeslots=tuple(timeslots),
        bookings=tuple(bookings),
        date_range=date_range,
        default_capacity=to_positive_int(request.default_capacity),
        metadata_capacity=_find_metadata_capacity(request.bookings),
        skipped=dict(skipped),
    )


# ── Field coercion ───────────────────────────────────────────────────────


def to_int(value: Any) -> int | None:
    """Integral number or numeric string → int; anything else → None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not NUMBER_RE.fullmatch(text):
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def to_positive_int(value: Any) -> int | None:
    number = to_int(value)
    if number is None or number <= 0:
        return None
    return number


def _to_finite_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not NUMBER_RE.fullmatch(value) or COMPACT_DATE_RE.fullmatch(value):
            return None
    if isinstance(value, (int, float, str)):
        try:
            number = float(value)
        except (ValueError, OverflowError):
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_calendar_date(text: str) -> date | None:
    """Parse strict YYYY-MM-DD; the value must serialize back unchanged."""
    if not CALENDAR_DATE_RE.fullmatch(text):
        return None
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.isoformat() == text else None


def parse_instant(value: Any) -> datetime | None:
    """
    Resolve a value to a UTC instant.

    Accepts:
        "YYYY-MM-DD"         → UTC midnight of that day
        epoch milliseconds   → int, float or plain numeric string
        datetime / date      → naive values are taken as UTC
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    if isinstance(value, str) and CALENDAR_DATE_RE.fullmatch(value):
        day = parse_calendar_date(value)
        if day is None:
            return None
        return datetime.combine(day, time.min, tzinfo=timezone.utc)

    millis = _to_finite_number(value)
    if millis is None:
        return None
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        return None


def parse_day(value: Any) -> date | None:
    """Resolve a value to its UTC calendar day."""
    instant = parse_instant(value)
    return instant.date() if instant is not None else None


def parse_date_range(date_from: Any, date_to: Any) -> DateRange | None:
    """Both bounds must resolve; a reversed range is kept as is (zero days)."""
    start = parse_day(date_from)
    end = parse_day(date_to)
    if start is None or end is None:
        return None
    return DateRange(start=start, end=end)


# ── Records ──────────────────────────────────────────────────────────────


def _as_request(payload: Any) -> CalendarRequest | None:
    if isinstance(payload, CalendarRequest):
        return payload
    if not isinstance(payload, Mapping):
        logger.debug(f"Payload is not a mapping: {type(payload).__name__}")
        return None
    try:
        return CalendarRequest.model_validate(dict(payload))
    except ValidationError as e:
        logger.debug(f"Invalid payload envelope: {e}")
        return None


def _normalize_timeslots(records: list, skipped: Counter) -> list[Timeslot]:
    timeslots: list[Timeslot] = []

    for raw in records:
        if not isinstance(raw, Mapping):
            skipped["timeslot_malformed"] += 1
            continue
        if raw.get("active") is not True:
            skipped["timeslot_inactive"] += 1
            continue

        timeslot_id = to_positive_int(raw.get("timeslot_id"))
        if timeslot_id is None:
            skipped["timeslot_bad_id"] += 1
            continue

        timeslots.append(Timeslot(
            timeslot_id=timeslot_id,
            active=True,
            capacity_override=to_positive_int(raw.get("capacity_override")),
            capacity=to_positive_int(raw.get("capacity")),
        ))

    return timeslots


def _normalize_bookings(
    records: list,
    date_range: DateRange,
    confirmed_status: str,
    skipped: Counter,
) -> list[Booking]:
    bookings: list[Booking] = []

    for raw in records:
        if not isinstance(raw, Mapping):
            skipped["booking_malformed"] += 1
            continue

        status = raw.get("status")
        if not isinstance(status, str) or status.strip().lower() != confirmed_status:
            skipped["booking_not_confirmed"] += 1
            continue

        timeslot_id = to_positive_int(raw.get("timeslot_id"))
        if timeslot_id is None:
            skipped["booking_bad_timeslot"] += 1
            continue

        instant = parse_instant(_first_present(raw, TIMESTAMP_KEYS))
        if instant is None:
            skipped["booking_bad_timestamp"] += 1
            continue
        if not date_range.contains(instant):
            skipped["booking_out_of_range"] += 1
            continue

        bookings.append(Booking(
            timeslot_id=timeslot_id,
            status=confirmed_status,
            instant=instant,
        ))

    return bookings


def _find_metadata_capacity(records: list) -> int | None:
    """First positive default_capacity carried by a booking, any status."""
    for raw in records:
        if not isinstance(raw, Mapping):
            continue
        capacity = to_positive_int(raw.get("default_capacity"))
        if capacity is None:
            metadata = raw.get("metadata")
            if isinstance(metadata, Mapping):
                capacity = to_positive_int(metadata.get("default_capacity"))
        if capacity is not None:
            return capacity
    return None


def _first_present(raw: Mapping, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None
