from __future__ import annotations

import logging
from datetime import date, datetime

import pytest

from agency_calendar.bookings import (
    BookingStatus,
    RoomAssignment,
    build_booking,
    build_bookings,
    parse_calendar_date,
)


def test_child_ages_track_child_count():
    room = RoomAssignment(room_type="Family", adult_count=2)

    room.add_child()
    room.add_child(age=6)
    assert room.child_count == 2
    assert room.child_ages == [0, 6]

    room.remove_child()
    assert room.child_count == len(room.child_ages) == 1

    room.remove_child()
    room.remove_child()
    assert room.child_count == 0
    assert room.child_ages == []


def test_set_child_age_rejects_negative():
    room = RoomAssignment(child_ages=[3])

    room.set_child_age(0, 5)
    assert room.child_ages == [5]
    with pytest.raises(ValueError):
        room.set_child_age(0, -1)


def test_from_counts_reconciles_age_list():
    padded = RoomAssignment.from_counts(child_count=3, child_ages=[4])
    truncated = RoomAssignment.from_counts(child_count=1, child_ages=[4, 8])

    assert padded.child_ages == [4, 0, 0]
    assert truncated.child_ages == [4]


def test_build_booking_maps_store_row():
    row = {
        "id": 42,
        "reference_number": "HH-0042",
        "guest_name": "  Amina Odhiambo ",
        "property_name": "Sarova Stanley",
        "check_in_date": "2026-02-25",
        "check_out_date": "2026-02-27",
        "number_of_nights": "2",
        "arrival_time": "13:45",
        "mode_of_transport": "Flying",
        "flight_details": "KQ 100",
        "status": "Cancelled",
        "room_details": [
            {"room_type": "Deluxe", "bed_type": "King", "adults": 2, "children": 2, "child_ages": [5]},
            "garbage",
        ],
        "profiles": [{"full_name": "Consultant One", "color": "#10b981"}],
    }

    booking = build_booking(row)

    assert booking.id == "42"
    assert booking.guest_name == "Amina Odhiambo"
    assert booking.nights == 2
    assert booking.transport_mode == "Flying"
    assert booking.status is BookingStatus.CANCELLED
    assert booking.owner_color == "#10b981"
    assert booking.consultant_name == "Consultant One"
    assert len(booking.room_assignments) == 1
    assert booking.room_assignments[0].child_ages == [5, 0]


def test_build_bookings_skips_rows_without_id(caplog):
    rows = [
        {"guest_name": "No id", "check_in_date": "2026-02-01"},
        {"id": "ok", "guest_name": "Fine", "check_in_date": "2026-02-01", "profiles": {"color": None}},
    ]

    with caplog.at_level(logging.WARNING):
        bookings = build_bookings(rows)

    assert [booking.id for booking in bookings] == ["ok"]
    assert bookings[0].owner_color is None
    assert bookings[0].status is BookingStatus.ISSUED
    assert any("missing an id" in record.getMessage() for record in caplog.records)


def test_parse_calendar_date_variants():
    assert parse_calendar_date("2026-02-25") == date(2026, 2, 25)
    assert parse_calendar_date("2026-02-25T23:59:59+03:00") == date(2026, 2, 25)
    assert parse_calendar_date("2026-02-25 08:00:00") == date(2026, 2, 25)
    assert parse_calendar_date(datetime(2026, 2, 25, 8, 0)) == date(2026, 2, 25)
    with pytest.raises(ValueError):
        parse_calendar_date("")
    with pytest.raises(ValueError):
        parse_calendar_date(None)
