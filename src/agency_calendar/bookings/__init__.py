"""Booking domain models and normalization helpers."""

from .models import Booking, BookingStatus, RoomAssignment
from .normalizer import (
    build_booking,
    build_bookings,
    build_room_assignments,
    parse_calendar_date,
)

__all__ = [
    "Booking",
    "BookingStatus",
    "RoomAssignment",
    "build_booking",
    "build_bookings",
    "build_room_assignments",
    "parse_calendar_date",
]
