from __future__ import annotations

import logging
from datetime import date

import pytest

from agency_calendar.bookings import Booking
from agency_calendar.views.grid import build_grid, grid_weeks
from agency_calendar.views.modes import ViewMode
from agency_calendar.views.window import resolve_window


def _booking(booking_id: str, check_in: str, property_name: str = "Sarova Stanley") -> Booking:
    return Booking(id=booking_id, guest_name=f"Guest {booking_id}", property_name=property_name, check_in_date=check_in)


def _cell(cells, day: date):
    return next(cell for cell in cells if cell.date == day)


def test_month_grid_suppresses_past_days():
    anchor = date(2026, 2, 15)
    today = date(2026, 2, 20)
    window = resolve_window(ViewMode.MONTH, anchor, today=today)
    past = _booking("past", "2026-02-10")
    upcoming = _booking("upcoming", "2026-02-25T00:00:00+00:00")

    cells = build_grid(window, [past, upcoming], mode=ViewMode.MONTH, anchor=anchor, today=today)

    assert [cell.date for cell in cells] == list(window.days())
    assert _cell(cells, date(2026, 2, 10)).bookings == []
    assert _cell(cells, date(2026, 2, 10)).is_past
    assert _cell(cells, date(2026, 2, 25)).bookings == [upcoming]
    assert all(past not in cell.bookings for cell in cells)


def test_today_cell_keeps_bookings_and_fetch_order():
    today = date(2026, 2, 20)
    window = resolve_window(ViewMode.WEEK, today, today=today)
    first = _booking("b1", "2026-02-20", "Zebra Lodge")
    second = _booking("b2", "2026-02-20", "Acacia Camp")
    third = _booking("b3", "2026-02-20T09:30:00")

    cells = build_grid(window, [first, second, third], mode=ViewMode.WEEK, anchor=today, today=today)
    cell = _cell(cells, today)

    assert cell.is_today
    assert cell.bookings == [first, second, third]
    assert cell.count == 3
    assert all(cell.is_current_period for cell in cells)


def test_month_grid_marks_days_outside_anchor_month():
    anchor = date(2026, 10, 19)
    window = resolve_window(ViewMode.MONTH, anchor, today=anchor)

    cells = build_grid(window, [], mode=ViewMode.MONTH, anchor=anchor, today=anchor)

    assert not _cell(cells, date(2026, 9, 27)).is_current_period
    assert _cell(cells, date(2026, 10, 1)).is_current_period
    assert len(grid_weeks(cells)) == 5
    assert all(len(week) == 7 for week in grid_weeks(cells))


def test_unparseable_check_in_is_skipped_with_warning(caplog):
    today = date(2026, 2, 1)
    window = resolve_window(ViewMode.WEEK, today, today=today)
    broken = _booking("broken", "not-a-date")
    empty = _booking("empty", "")
    good = _booking("good", "2026-02-03")

    with caplog.at_level(logging.WARNING):
        cells = build_grid(window, [broken, good, empty], mode=ViewMode.WEEK, anchor=today, today=today)

    assert _cell(cells, date(2026, 2, 3)).bookings == [good]
    skipped = [record for record in caplog.records if "unparseable" in record.getMessage()]
    assert len(skipped) == 2


def test_list_mode_has_no_grid():
    today = date(2026, 2, 1)
    window = resolve_window(ViewMode.LIST, today, today=today)

    with pytest.raises(ValueError):
        build_grid(window, [], mode=ViewMode.LIST, anchor=today, today=today)
