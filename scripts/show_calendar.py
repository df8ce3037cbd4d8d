"""Print a calendar view fetched from the booking store."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from agency_calendar.config.settings import Settings
from agency_calendar.config.view_config import ViewConfig, parse_anchor
from agency_calendar.core.clock import Clock, FixedClock, SystemClock
from agency_calendar.core.logging import configure_logging
from agency_calendar.services import BookingStoreClient
from agency_calendar.views import ViewMode, grid_weeks
from agency_calendar.views.controller import CalendarController

logger = logging.getLogger("show_calendar")


def _render_grid(controller: CalendarController) -> str:
    lines = [controller.period_label(), ""]
    for week in grid_weeks(controller.cells):
        for cell in week:
            marker = "*" if cell.is_today else " "
            label = f"{cell.date:%a} {cell.date.isoformat()}{marker}"
            if not cell.is_current_period:
                label = f"({label})"
            if not cell.bookings:
                lines.append(label)
                continue
            lines.append(f"{label} [{cell.count}]")
            for booking in cell.bookings:
                arrival = f" @ {booking.arrival_time}" if booking.arrival_time else ""
                tones = controller.tones_for(booking)
                lines.append(f"    {booking.guest_name}{arrival} · {booking.property_name} ({tones.foreground})")
        lines.append("")
    return "\n".join(lines)


def _render_list(controller: CalendarController) -> str:
    lines = [controller.period_label(), ""]
    if not controller.rows:
        lines.append("No upcoming bookings")
    for row in controller.rows:
        today_marker = " (today)" if row.is_today else ""
        transport = f" · {row.transport}" if row.transport else ""
        lines.append(
            f"{row.badge_month} {row.badge_day:>2}{today_marker}  "
            f"{row.booking.guest_name} · {row.booking.property_name}{transport}"
        )
    return "\n".join(lines)


def _as_json(controller: CalendarController) -> str:
    payload: dict[str, object] = {
        "mode": controller.mode.value,
        "anchor": controller.anchor.isoformat(),
        "label": controller.period_label(),
        "window": controller.window.to_dict() if controller.window else None,
        "bookings": [booking.to_dict() for booking in controller.bookings],
    }
    if controller.mode is ViewMode.LIST:
        payload["rows"] = [row.to_dict() for row in controller.rows]
    else:
        payload["cells"] = [cell.to_dict() for cell in controller.cells]
    if controller.detail:
        payload["detail"] = controller.detail.to_dict()
    return json.dumps(payload, indent=2)


async def run(args: argparse.Namespace) -> int:
    settings = Settings()
    config: Optional[ViewConfig] = None
    config_path: Optional[Path] = args.config or settings.view_config_path
    if config_path:
        config = ViewConfig.load(config_path)
        config.apply_to(settings)
    if args.mode:
        settings.default_mode = ViewMode.parse(args.mode)
    log_path = configure_logging(settings)
    logger.debug("Logging to %s", log_path)

    clock: Clock = FixedClock(date.fromisoformat(args.today)) if args.today else SystemClock()
    today = clock.today()
    anchor = parse_anchor(args.anchor, today=today) if args.anchor else None
    if anchor is None and config is not None:
        anchor = config.anchor_date(today)

    if not settings.store_configured():
        logger.error("Booking store is not configured; set CALENDAR_STORE_URL")
        return 2

    store = BookingStoreClient.from_settings(settings)
    controller = CalendarController.from_settings(
        settings,
        store,
        clock=clock,
        anchor=anchor,
        on_create_booking=lambda: print("Open /bookings/new"),
    )
    if not await controller.load():
        logger.error("Calendar fetch failed: %s", controller.last_error)
        return 1

    if args.select:
        controller.select(args.select)
        if controller.detail_error:
            logger.error("Booking %s: %s", args.select, controller.detail_error)

    if args.json:
        print(_as_json(controller))
    elif controller.mode is ViewMode.LIST:
        print(_render_list(controller))
    else:
        print(_render_grid(controller))
    if controller.detail and not args.json:
        detail = controller.detail
        print(
            f"\n{detail.guest_name} [{detail.status_badge}] ref {detail.reference}\n"
            f"{detail.property_name} · {detail.room_type_summary}\n"
            f"{detail.check_in} → {detail.check_out} ({detail.nights_label})"
        )
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Show bookings as a month, week or list view")
    parser.add_argument("--mode", choices=[mode.value for mode in ViewMode])
    parser.add_argument("--anchor", help="Anchor date (ISO or relative, e.g. '+1m')")
    parser.add_argument("--today", help="Pin today's date (ISO) instead of the system clock")
    parser.add_argument("--config", type=Path, help="TOML view preset")
    parser.add_argument("--select", help="Booking id to project into the detail panel")
    parser.add_argument("--json", action="store_true", help="Emit the view as JSON")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
