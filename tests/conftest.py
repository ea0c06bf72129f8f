import pytest

from offer_calendar.services.availability import CapacityPolicy

JAN_1_MS = 1767225600000  # 2026-01-01T00:00:00Z
HOUR_MS = 3600 * 1000
DAY_MS = 24 * HOUR_MS


def slot(timeslot_id, capacity=None, active=True, **extra):
    record = {"timeslot_id": timeslot_id, "active": active, **extra}
    if capacity is not None:
        record["capacity"] = capacity
    return record


def booking(timeslot_id, timestamp, status="CONFIRMED", **extra):
    return {"timeslot_id": timeslot_id, "status": status, "timestamp": timestamp, **extra}


def payload(timeslots=(), bookings=(), date_from="2026-01-01", date_to="2026-01-02", **extra):
    return {
        "timeslots": list(timeslots),
        "bookings": list(bookings),
        "from": date_from,
        "to": date_to,
        **extra,
    }


def days_of(report) -> dict[str, int]:
    return {entry.date: entry.remaining_slots for entry in report.available_days}


@pytest.fixture
def policy():
    return CapacityPolicy()
