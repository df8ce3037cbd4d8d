"""Bucket fetched bookings into per-day cells for Month and Week views."""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Sequence

from agency_calendar.bookings.models import Booking
from agency_calendar.bookings.normalizer import parse_calendar_date

from .modes import ViewMode, ViewWindow

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CalendarCell:
    """One day of a grid view."""

    date: date
    bookings: List[Booking] = field(default_factory=list)
    is_current_period: bool = True
    is_today: bool = False
    is_past: bool = False

    @property
    def count(self) -> int:
        return len(self.bookings)

    def to_dict(self) -> dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "is_current_period": self.is_current_period,
            "is_today": self.is_today,
            "is_past": self.is_past,
            "bookings": [booking.id for booking in self.bookings],
        }


def bucket_by_check_in(bookings: Iterable[Booking]) -> Dict[date, List[Booking]]:
    """Group bookings by check-in date, keeping fetch order within each day.

    Bookings whose check-in cannot be parsed are logged and left out.
    """
    buckets: Dict[date, List[Booking]] = defaultdict(list)
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
        buckets[check_in].append(booking)
    return buckets


def build_grid(
    window: ViewWindow,
    bookings: Sequence[Booking],
    *,
    mode: ViewMode,
    anchor: date,
    today: date,
) -> List[CalendarCell]:
    """Return one cell per day of ``window`` in ascending order.

    Days before ``today`` are always rendered empty, even when the store
    returned bookings for them.
    """
    if mode is ViewMode.LIST:
        raise ValueError("List mode has no grid; use build_list instead")
    buckets = bucket_by_check_in(bookings)
    cells: List[CalendarCell] = []
    for day in window.days():
        is_past = day < today
        if mode is ViewMode.MONTH:
            current = day.year == anchor.year and day.month == anchor.month
        else:
            current = True
        cells.append(
            CalendarCell(
                date=day,
                bookings=[] if is_past else list(buckets.get(day, ())),
                is_current_period=current,
                is_today=day == today,
                is_past=is_past,
            )
        )
    return cells


def grid_weeks(cells: Sequence[CalendarCell]) -> List[List[CalendarCell]]:
    return [list(cells[index : index + 7]) for index in range(0, len(cells), 7)]


__all__ = ["CalendarCell", "bucket_by_check_in", "build_grid", "grid_weeks"]
