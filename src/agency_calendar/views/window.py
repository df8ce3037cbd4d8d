"""Resolve the date window a calendar view covers."""
from __future__ import annotations

import calendar
from datetime import date, timedelta

from .modes import ViewMode, ViewWindow

LIST_HORIZON_MONTHS = 6

_WEEKDAY_NAMES = {name.lower(): index for index, name in enumerate(calendar.day_name)}


def parse_weekday(value: int | str) -> int:
    """Accept 0 (Monday) .. 6 (Sunday), a numeric string, or an English weekday name."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _WEEKDAY_NAMES:
            return _WEEKDAY_NAMES[text]
        try:
            value = int(text)
        except ValueError as exc:
            raise ValueError(f"Unknown weekday '{value}'") from exc
    weekday = int(value)
    if not 0 <= weekday <= 6:
        raise ValueError("first_weekday must be between 0 (Monday) and 6 (Sunday)")
    return weekday


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the target month's length."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def start_of_week(day: date, first_weekday: int = calendar.SUNDAY) -> date:
    return day - timedelta(days=(day.weekday() - first_weekday) % 7)


def end_of_week(day: date, first_weekday: int = calendar.SUNDAY) -> date:
    return start_of_week(day, first_weekday) + timedelta(days=6)


def resolve_window(
    mode: ViewMode,
    anchor: date,
    *,
    today: date,
    first_weekday: int = calendar.SUNDAY,
    list_horizon_months: int = LIST_HORIZON_MONTHS,
) -> ViewWindow:
    """Return the inclusive window for ``mode``.

    Month windows are widened to whole weeks. The List window rolls forward
    from ``today`` and ignores ``anchor``; its end is the day before
    ``today + list_horizon_months``.
    """
    if mode is ViewMode.MONTH:
        return ViewWindow(
            start=start_of_week(start_of_month(anchor), first_weekday),
            end=end_of_week(end_of_month(anchor), first_weekday),
        )
    if mode is ViewMode.WEEK:
        return ViewWindow(
            start=start_of_week(anchor, first_weekday),
            end=end_of_week(anchor, first_weekday),
        )
    if mode is ViewMode.LIST:
        if list_horizon_months <= 0:
            raise ValueError("list_horizon_months must be positive")
        return ViewWindow(start=today, end=add_months(today, list_horizon_months) - timedelta(days=1))
    raise ValueError(f"Unsupported view mode: {mode!r}")


def shift_anchor(mode: ViewMode, anchor: date, steps: int) -> date:
    """Move ``anchor`` by ``steps`` periods of ``mode``; List anchors never move."""
    if mode is ViewMode.MONTH:
        return add_months(anchor, steps)
    if mode is ViewMode.WEEK:
        return anchor + timedelta(weeks=steps)
    return anchor


__all__ = [
    "LIST_HORIZON_MONTHS",
    "add_months",
    "end_of_month",
    "end_of_week",
    "parse_weekday",
    "resolve_window",
    "shift_anchor",
    "start_of_month",
    "start_of_week",
]
