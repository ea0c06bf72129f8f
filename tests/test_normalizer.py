from datetime import date, datetime, timezone

import pytest

from offer_calendar.schemas.calendar import CalendarRequest
from offer_calendar.services.availability.normalizer import (
    normalize_request,
    parse_calendar_date,
    parse_day,
    parse_instant,
    to_positive_int,
)

from .conftest import DAY_MS, JAN_1_MS, booking, payload, slot


@pytest.mark.parametrize("value, expected", [
    (3, 3),
    ("3", 3),
    (" 4 ", 4),
    (5.0, 5),
    ("6.0", 6),
    (0, None),
    (-2, None),
    (2.5, None),
    ("abc", None),
    ("nan", None),
    (True, None),
    (None, None),
    ([1], None),
])
def test_to_positive_int(value, expected):
    assert to_positive_int(value) == expected


def test_calendar_date_must_round_trip():
    assert parse_calendar_date("2026-01-31") == date(2026, 1, 31)
    assert parse_calendar_date("2026-04-31") is None
    assert parse_calendar_date("2026-02-29") is None
    assert parse_calendar_date("2028-02-29") == date(2028, 2, 29)
    assert parse_calendar_date("20260101") is None
    assert parse_calendar_date("2026-1-01") is None


def test_epoch_millis_resolve_to_utc_day():
    assert parse_day(JAN_1_MS) == date(2026, 1, 1)
    assert parse_day(JAN_1_MS + DAY_MS - 1) == date(2026, 1, 1)
    assert parse_day(JAN_1_MS + DAY_MS) == date(2026, 1, 2)
    assert parse_day(str(JAN_1_MS)) == date(2026, 1, 1)
    assert parse_day(float(JAN_1_MS)) == date(2026, 1, 1)


def test_parse_instant_rejects_garbage():
    assert parse_instant(None) is None
    assert parse_instant(True) is None
    assert parse_instant("tomorrow") is None
    assert parse_instant(float("inf")) is None
    assert parse_instant(10 ** 30) is None


def test_parse_instant_accepts_datetime_objects():
    naive = datetime(2026, 1, 1, 10, 30)
    assert parse_instant(naive) == datetime(2026, 1, 1, 10, 30, tzinfo=timezone.utc)
    assert parse_instant(date(2026, 1, 1)) == datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_unresolvable_range_gives_empty_bundle():
    normalized = normalize_request(payload([slot(1, 2)], date_from="2026-02-30"))

    assert normalized.is_empty
    assert normalized.timeslots == ()
    assert normalized.date_range is None


def test_missing_range_gives_empty_bundle():
    normalized = normalize_request({"timeslots": [slot(1, 2)]})
    assert normalized.is_empty


@pytest.mark.parametrize("bad_payload", [None, "not a payload", [1, 2, 3], 42])
def test_non_mapping_payload_gives_empty_bundle(bad_payload):
    assert normalize_request(bad_payload).is_empty


def test_reversed_range_is_not_swapped():
    normalized = normalize_request(payload([slot(1)], date_from="2026-01-05", date_to="2026-01-01"))

    assert normalized.date_range.start == date(2026, 1, 5)
    assert normalized.date_range.end == date(2026, 1, 1)
    assert list(normalized.date_range.days()) == []


def test_only_strictly_true_active_timeslots_are_kept():
    normalized = normalize_request(payload([
        slot(1, active=True),
        slot(2, active="true"),
        slot(3, active=1),
        slot(4, active=False),
        {"timeslot_id": 5},
    ]))

    assert [t.timeslot_id for t in normalized.timeslots] == [1]
    assert normalized.skipped["timeslot_inactive"] == 4


def test_timeslot_fields_are_coerced():
    normalized = normalize_request(payload([
        {"timeslot_id": "7", "active": True, "capacity": "3", "capacity_override": "x"},
        {"timeslot_id": "seven", "active": True},
        "garbage",
    ]))

    assert len(normalized.timeslots) == 1
    timeslot = normalized.timeslots[0]
    assert timeslot.timeslot_id == 7
    assert timeslot.capacity == 3
    assert timeslot.capacity_override is None


def test_status_is_case_insensitive_and_confirmed_only():
    normalized = normalize_request(payload([slot(1)], [
        booking(1, "2026-01-01", status="CONFIRMED"),
        booking(1, "2026-01-01", status="confirmed"),
        booking(1, "2026-01-01", status=" Confirmed "),
        booking(1, "2026-01-01", status="pending"),
        booking(1, "2026-01-01", status="CANCELLED"),
        booking(1, "2026-01-01", status=""),
        {"timeslot_id": 1, "timestamp": "2026-01-01"},
    ]))

    assert len(normalized.bookings) == 3
    assert normalized.skipped["booking_not_confirmed"] == 4


def test_confirmed_status_is_configurable():
    normalized = normalize_request(
        payload([slot(1)], [booking(1, "2026-01-01", status="BOOKED")]),
        confirmed_status="booked",
    )
    assert len(normalized.bookings) == 1


def test_booking_window_is_half_open_over_whole_days():
    normalized = normalize_request(payload([slot(1)], [
        booking(1, JAN_1_MS - 1),
        booking(1, JAN_1_MS),
        booking(1, JAN_1_MS + 2 * DAY_MS - 1),
        booking(1, JAN_1_MS + 2 * DAY_MS),
    ]))

    assert [b.instant for b in normalized.bookings] == [
        datetime(2026, 1, 1, tzinfo=timezone.utc),
        datetime(2026, 1, 2, 23, 59, 59, 999000, tzinfo=timezone.utc),
    ]
    assert normalized.skipped["booking_out_of_range"] == 2


def test_malformed_bookings_are_skipped():
    normalized = normalize_request(payload([slot(1)], [
        booking("x", "2026-01-01"),
        booking(1, "2026-13-01"),
        booking(1, None),
        None,
        booking(1, "2026-01-02"),
    ]))

    assert len(normalized.bookings) == 1
    assert normalized.skipped == {
        "booking_bad_timeslot": 1,
        "booking_bad_timestamp": 2,
        "booking_malformed": 1,
    }


def test_original_field_names_are_accepted():
    normalized = normalize_request({
        "offer_timeslot": [slot(1)],
        "book": [booking(1, JAN_1_MS)],
        "from": JAN_1_MS,
        "to": JAN_1_MS,
    })

    assert len(normalized.timeslots) == 1
    assert len(normalized.bookings) == 1


def test_default_capacity_sources():
    normalized = normalize_request(payload(
        [slot(1)],
        [
            booking(1, "2026-01-01", status="cancelled", metadata={"default_capacity": "4"}),
            booking(1, "2026-01-01", default_capacity=9),
        ],
        default_capacity="2",
    ))

    assert normalized.default_capacity == 2
    assert normalized.metadata_capacity == 4


def test_request_model_is_accepted():
    request = CalendarRequest(timeslots=[slot(1)], date_from="2026-01-01", date_to="2026-01-01")
    normalized = normalize_request(request)

    assert len(normalized.timeslots) == 1
    assert list(normalized.date_range.days()) == [date(2026, 1, 1)]


def test_non_list_collections_are_treated_as_empty():
    normalized = normalize_request({"timeslots": "nope", "bookings": None, "from": "2026-01-01", "to": "2026-01-01"})

    assert normalized.timeslots == ()
    assert normalized.bookings == ()


@pytest.mark.parametrize("value", [10 ** 400, -(10 ** 400), "1" + "0" * 400, 1e300])
def test_parse_instant_rejects_out_of_range_numbers(value):
    assert parse_instant(value) is None


@pytest.mark.parametrize("value", ["20260101", "1e3", "1_000", "0x10", "12.", " 2026-01-01"])
def test_parse_instant_rejects_non_plain_strings(value):
    assert parse_instant(value) is None


def test_plain_numeric_strings_are_epoch_millis():
    assert parse_day("-86400000") == date(1969, 12, 31)
    assert parse_day(f"{JAN_1_MS}.5") == date(2026, 1, 1)


@pytest.mark.parametrize("value", ["1e3", "1_000", "+-3"])
def test_to_positive_int_rejects_non_plain_strings(value):
    assert to_positive_int(value) is None


def test_compact_date_range_gives_empty_bundle():
    normalized = normalize_request(payload([slot(1, 2)], date_from="20260101", date_to="20260101"))
    assert normalized.is_empty
