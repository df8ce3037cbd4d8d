"""Flat chronological feed for the List view."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from agency_calendar.bookings.models import Booking
from agency_calendar.bookings.normalizer import parse_calendar_date

logger = logging.getLogger(__name__)

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_TRANSPORT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("flight", ("flight", "air", "flying")),
    ("car", ("transfer", "car", "taxi")),
    ("bus", ("bus", "shuttle")),
    ("train", ("train", "rail")),
)


def transport_kind(mode: Optional[str]) -> Optional[str]:
    """Classify a free-text transport mode into an icon family."""
    if not mode:
        return None
    lowered = mode.lower()
    for kind, keywords in _TRANSPORT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return kind
    return None


def transport_summary(booking: Booking) -> Optional[str]:
    return booking.transport_mode or booking.flight_details or None


@dataclass(frozen=True, slots=True)
class ListRow:
    booking: Booking
    date: date
    badge_month: str
    badge_day: str
    is_today: bool
    transport: Optional[str] = None
    transport_kind: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "booking": self.booking.id,
            "date": self.date.isoformat(),
            "badge": f"{self.badge_month} {self.badge_day}",
            "is_today": self.is_today,
            "transport": self.transport,
            "transport_kind": self.transport_kind,
        }


def build_list(bookings: Iterable[Booking], *, today: date) -> List[ListRow]:
    """One row per booking, ordered by check-in date.

    The sort is stable, so bookings sharing a day keep the order they arrived
    in. Same-day bookings are not merged.
    """
    rows: List[ListRow] = []
    for booking in bookings:
        try:
            check_in = parse_calendar_date(booking.check_in_date)
        except ValueError:
            logger.warning(
                "Skipping booking %s with unparseable check-in date %r",
                booking.id,
                booking.check_in_date,
            )
            continue
        rows.append(
            ListRow(
                booking=booking,
                date=check_in,
                badge_month=_MONTH_ABBR[check_in.month - 1],
                badge_day=str(check_in.day),
                is_today=check_in == today,
                transport=transport_summary(booking),
                transport_kind=transport_kind(booking.transport_mode),
            )
        )
    rows.sort(key=lambda row: row.date)
    return rows


__all__ = ["ListRow", "build_list", "transport_kind", "transport_summary"]
