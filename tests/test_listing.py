from __future__ import annotations

from datetime import date

from agency_calendar.bookings import Booking
from agency_calendar.views.listing import build_list, transport_kind


def test_build_list_emits_one_row_per_booking():
    today = date(2026, 2, 20)
    bookings = [
        Booking(id="1", guest_name="Amina", property_name="Sarova Stanley", check_in_date="2026-02-20"),
        Booking(
            id="2",
            guest_name="Brian",
            property_name="Sarova Stanley",
            check_in_date="2026-02-20",
            transport_mode="Flying",
            flight_details="KQ 101",
        ),
        Booking(
            id="3",
            guest_name="Chen",
            property_name="Mara Camp",
            check_in_date="2026-03-04T00:00:00Z",
            flight_details="KQ 555 arriving 14:00",
        ),
    ]

    rows = build_list(bookings, today=today)

    assert [row.booking.id for row in rows] == ["1", "2", "3"]
    assert [(row.badge_month, row.badge_day) for row in rows] == [("Feb", "20"), ("Feb", "20"), ("Mar", "4")]
    assert [row.is_today for row in rows] == [True, True, False]
    assert rows[0].transport is None
    assert rows[1].transport == "Flying"
    assert rows[1].transport_kind == "flight"
    assert rows[2].transport == "KQ 555 arriving 14:00"
    assert rows[2].transport_kind is None


def test_build_list_skips_unparseable_dates():
    bookings = [
        Booking(id="bad", guest_name="X", property_name="Y", check_in_date="31/02/2026"),
        Booking(id="ok", guest_name="X", property_name="Y", check_in_date="2026-05-01"),
    ]

    rows = build_list(bookings, today=date(2026, 2, 1))

    assert [row.booking.id for row in rows] == ["ok"]
    assert rows[0].to_dict()["badge"] == "May 1"


def test_build_list_orders_by_check_in_keeping_same_day_order():
    bookings = [
        Booking(id="late", guest_name="X", property_name="Y", check_in_date="2026-04-02"),
        Booking(id="first", guest_name="X", property_name="Y", check_in_date="2026-03-01T09:00:00"),
        Booking(id="second", guest_name="X", property_name="Y", check_in_date="2026-03-01"),
    ]

    rows = build_list(bookings, today=date(2026, 2, 20))

    assert [row.booking.id for row in rows] == ["first", "second", "late"]


def test_transport_kind_keywords():
    assert transport_kind("Air Kenya") == "flight"
    assert transport_kind("Airport Transfer") == "flight"
    assert transport_kind("Private taxi") == "car"
    assert transport_kind("Shuttle") == "bus"
    assert transport_kind("SGR Train") == "train"
    assert transport_kind("Walking") is None
    assert transport_kind(None) is None
