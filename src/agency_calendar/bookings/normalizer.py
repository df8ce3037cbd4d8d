"""Utilities to transform raw booking store rows into ``Booking`` records."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from .models import Booking, BookingStatus, RoomAssignment

logger = logging.getLogger(__name__)


def parse_calendar_date(value: Any) -> date:
    """Return the calendar-date component of a store date/datetime value.

    Raises ``ValueError`` when no date can be read.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a calendar date: {value!r}")
    text = value.strip().split("T", 1)[0].split(" ", 1)[0]
    return date.fromisoformat(text)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_status(value: Any) -> BookingStatus:
    text = (_text(value) or "").lower()
    if text == BookingStatus.CANCELLED.value:
        return BookingStatus.CANCELLED
    return BookingStatus.ISSUED


def _owner_profile(row: Dict[str, Any]) -> Dict[str, Any]:
    profile = row.get("profiles")
    if isinstance(profile, list):
        profile = profile[0] if profile else None
    return profile if isinstance(profile, dict) else {}


def build_room_assignments(entries: Optional[Iterable[Dict[str, Any]]]) -> List[RoomAssignment]:
    rooms: List[RoomAssignment] = []
    if not entries:
        return rooms
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        ages = [age for age in (_to_int(item) for item in entry.get("child_ages") or []) if age is not None]
        child_count = _to_int(entry.get("children"))
        rooms.append(
            RoomAssignment.from_counts(
                room_type=_text(entry.get("room_type")) or "",
                bed_type=_text(entry.get("bed_type")) or "",
                adult_count=_to_int(entry.get("adults")) or 0,
                child_count=len(ages) if child_count is None else child_count,
                child_ages=ages,
            )
        )
    return rooms


def build_booking(row: Dict[str, Any]) -> Booking:
    booking_id = row.get("id")
    if booking_id in (None, ""):
        raise ValueError("Booking row is missing an id")
    profile = _owner_profile(row)
    return Booking(
        id=str(booking_id),
        guest_name=_text(row.get("guest_name")) or "",
        property_name=_text(row.get("property_name")) or "",
        check_in_date=str(row.get("check_in_date") or ""),
        check_out_date=_text(row.get("check_out_date")),
        nights=_to_int(row.get("number_of_nights")),
        arrival_time=_text(row.get("arrival_time")),
        transport_mode=_text(row.get("mode_of_transport")),
        room_assignments=build_room_assignments(row.get("room_details")),
        owner_color=_text(row.get("owner_color")) or _text(profile.get("color")),
        status=_parse_status(row.get("status")),
        reference_number=_text(row.get("reference_number")),
        guest_nationality=_text(row.get("guest_nationality")),
        meal_plan=_text(row.get("meal_plan")),
        flight_details=_text(row.get("flight_details")),
        room_type=_text(row.get("room_type")),
        number_of_rooms=_to_int(row.get("number_of_rooms")),
        number_of_adults=_to_int(row.get("number_of_adults")),
        number_of_children=_to_int(row.get("number_of_children")),
        driver_contact=_text(row.get("driver_contact")),
        consultant_name=_text(profile.get("full_name")),
    )


def build_bookings(rows: Iterable[Dict[str, Any]]) -> List[Booking]:
    bookings: List[Booking] = []
    for row in rows:
        if not isinstance(row, dict):
            logger.warning("Skipping non-object booking row: %r", row)
            continue
        try:
            bookings.append(build_booking(row))
        except ValueError as exc:
            logger.warning("Skipping booking row: %s", exc)
    return bookings
