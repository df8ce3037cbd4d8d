"""Derived display fields for the booking detail panel."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from agency_calendar.bookings.models import Booking
from agency_calendar.bookings.normalizer import parse_calendar_date

NOT_AVAILABLE = "N/A"


class InvertedStayError(ValueError):
    """Raised when a booking checks out before it checks in."""

    def __init__(self, booking_id: str, nights: int) -> None:
        super().__init__(f"Booking {booking_id} has check-out before check-in ({nights} nights)")
        self.booking_id = booking_id
        self.nights = nights


def compute_nights(booking: Booking) -> Optional[int]:
    """Stored nights if present, else the day difference between check-out and check-in.

    Returns ``None`` when either date is missing or unreadable and raises
    ``InvertedStayError`` for a negative stay.
    """
    if booking.nights is not None:
        nights = booking.nights
    else:
        if not booking.check_in_date or not booking.check_out_date:
            return None
        try:
            check_in = parse_calendar_date(booking.check_in_date)
            check_out = parse_calendar_date(booking.check_out_date)
        except ValueError:
            return None
        nights = (check_out - check_in).days
    if nights < 0:
        raise InvertedStayError(booking.id, nights)
    return nights


def room_type_summary(booking: Booking) -> str:
    names = [room.room_type for room in booking.room_assignments if room.room_type]
    if names:
        return ", ".join(names)
    return booking.room_type or NOT_AVAILABLE


def status_badge(booking: Booking) -> str:
    return "Cancelled" if booking.is_cancelled else "Confirmed"


def format_display_date(value: Optional[str]) -> str:
    if not value:
        return NOT_AVAILABLE
    try:
        day = parse_calendar_date(value)
    except ValueError:
        return value
    return f"{day:%b} {day.day}, {day.year}"


@dataclass(frozen=True, slots=True)
class BookingDetail:
    booking_id: str
    guest_name: str
    guest_initial: str
    guest_nationality: Optional[str]
    reference: str
    status_badge: str
    property_name: str
    room_type_summary: str
    meal_plan: str
    check_in: str
    check_out: str
    nights: Optional[int]
    adults: int
    children: int
    rooms: int
    arrival: str
    transport_mode: Optional[str]
    flight_details: Optional[str]
    driver_contact: Optional[str]

    @property
    def nights_label(self) -> str:
        if self.nights is None:
            return NOT_AVAILABLE
        return f"{self.nights} Night{'' if self.nights == 1 else 's'}"

    def to_dict(self) -> dict[str, object]:
        return {
            "booking_id": self.booking_id,
            "guest_name": self.guest_name,
            "guest_initial": self.guest_initial,
            "guest_nationality": self.guest_nationality,
            "reference": self.reference,
            "status_badge": self.status_badge,
            "property_name": self.property_name,
            "room_type_summary": self.room_type_summary,
            "meal_plan": self.meal_plan,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "nights": self.nights,
            "nights_label": self.nights_label,
            "adults": self.adults,
            "children": self.children,
            "rooms": self.rooms,
            "arrival": self.arrival,
            "transport_mode": self.transport_mode,
            "flight_details": self.flight_details,
            "driver_contact": self.driver_contact,
        }


def project_detail(booking: Booking) -> BookingDetail:
    """Build the detail panel view; raises ``InvertedStayError`` for inverted stays."""
    rooms = booking.room_assignments
    adults = booking.number_of_adults
    if adults is None:
        adults = sum(room.adult_count for room in rooms)
    children = booking.number_of_children
    if children is None:
        children = sum(room.child_count for room in rooms)
    room_total = booking.number_of_rooms
    if room_total is None:
        room_total = len(rooms)

    return BookingDetail(
        booking_id=booking.id,
        guest_name=booking.guest_name,
        guest_initial=booking.guest_name[:1].upper(),
        guest_nationality=booking.guest_nationality,
        reference=booking.reference_number or NOT_AVAILABLE,
        status_badge=status_badge(booking),
        property_name=booking.property_name,
        room_type_summary=room_type_summary(booking),
        meal_plan=booking.meal_plan or NOT_AVAILABLE,
        check_in=format_display_date(booking.check_in_date),
        check_out=format_display_date(booking.check_out_date),
        nights=compute_nights(booking),
        adults=adults,
        children=children,
        rooms=room_total,
        arrival=booking.arrival_time or "Not specified",
        transport_mode=booking.transport_mode,
        flight_details=booking.flight_details,
        driver_contact=booking.driver_contact,
    )


__all__ = [
    "BookingDetail",
    "InvertedStayError",
    "compute_nights",
    "format_display_date",
    "project_detail",
    "room_type_summary",
    "status_badge",
]
