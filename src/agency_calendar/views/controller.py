"""Calendar view state: mode, anchor, navigation and fetch sequencing."""
from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Callable, List, Optional, TYPE_CHECKING

from agency_calendar.bookings.models import Booking
from agency_calendar.core.clock import Clock, SystemClock
from agency_calendar.services.booking_store import BookingStore, BookingStoreError

from .colors import ToneTriple, resolve_tones
from .detail import BookingDetail, InvertedStayError, project_detail
from .grid import CalendarCell, build_grid
from .listing import ListRow, build_list
from .modes import ViewMode, ViewWindow
from .window import LIST_HORIZON_MONTHS, end_of_week, resolve_window, shift_anchor, start_of_week

if TYPE_CHECKING:  # pragma: no cover
    from agency_calendar.config.settings import Settings

logger = logging.getLogger(__name__)


class CalendarController:
    """Holds the active view and keeps its cells/rows in sync with the store.

    Each state change issues one fetch tagged with an increasing sequence
    token. A response is applied only if its token is still the latest one, so
    a slow earlier request can never overwrite a newer view.
    """

    def __init__(
        self,
        store: BookingStore,
        *,
        clock: Optional[Clock] = None,
        mode: ViewMode = ViewMode.MONTH,
        anchor: Optional[date] = None,
        first_weekday: int = calendar.SUNDAY,
        list_horizon_months: int = LIST_HORIZON_MONTHS,
        on_create_booking: Optional[Callable[[], None]] = None,
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self.mode = mode
        self.anchor = anchor or self.clock.today()
        self.first_weekday = first_weekday
        self.list_horizon_months = list_horizon_months
        self.on_create_booking = on_create_booking

        self.loading = False
        self.last_error: Optional[str] = None
        self.window: Optional[ViewWindow] = None
        self.bookings: List[Booking] = []
        self.cells: List[CalendarCell] = []
        self.rows: List[ListRow] = []

        self.selected: Optional[Booking] = None
        self.detail: Optional[BookingDetail] = None
        self.detail_error: Optional[str] = None

        self._latest_token = 0

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        store: BookingStore,
        *,
        clock: Optional[Clock] = None,
        anchor: Optional[date] = None,
        on_create_booking: Optional[Callable[[], None]] = None,
    ) -> "CalendarController":
        return cls(
            store,
            clock=clock,
            mode=settings.default_mode,
            anchor=anchor,
            first_weekday=settings.first_weekday,
            list_horizon_months=settings.list_horizon_months,
            on_create_booking=on_create_booking,
        )

    # ------------------------------------------------------------------
    # navigation

    async def load(self) -> bool:
        """Fetch the current view without changing state."""
        return await self._fetch()

    async def refresh(self) -> bool:
        return await self._fetch()

    async def next(self) -> bool:
        if self.mode is ViewMode.LIST:
            return False
        self.anchor = shift_anchor(self.mode, self.anchor, 1)
        return await self._fetch()

    async def prev(self) -> bool:
        if self.mode is ViewMode.LIST:
            return False
        self.anchor = shift_anchor(self.mode, self.anchor, -1)
        return await self._fetch()

    async def set_mode(self, mode: ViewMode | str) -> bool:
        self.mode = ViewMode.parse(mode)
        return await self._fetch()

    def can_navigate_back(self) -> bool:
        """False while the anchor sits in today's month.

        Week mode uses the same month check as Month mode.
        """
        if self.mode is ViewMode.LIST:
            return False
        today = self.clock.today()
        return (self.anchor.year, self.anchor.month) != (today.year, today.month)

    def current_window(self) -> ViewWindow:
        return resolve_window(
            self.mode,
            self.anchor,
            today=self.clock.today(),
            first_weekday=self.first_weekday,
            list_horizon_months=self.list_horizon_months,
        )

    def period_label(self) -> str:
        if self.mode is ViewMode.MONTH:
            return f"{calendar.month_name[self.anchor.month]} {self.anchor.year}"
        if self.mode is ViewMode.WEEK:
            start = start_of_week(self.anchor, self.first_weekday)
            end = end_of_week(self.anchor, self.first_weekday)
            return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
        return f"Next {self.list_horizon_months} months"

    # ------------------------------------------------------------------
    # detail panel

    def select(self, booking_id: str) -> Optional[BookingDetail]:
        booking = next((item for item in self.bookings if item.id == booking_id), None)
        if booking is None:
            logger.warning("Booking %s is not part of the current view", booking_id)
            return None
        self.selected = booking
        self.detail = None
        self.detail_error = None
        try:
            self.detail = project_detail(booking)
        except InvertedStayError as exc:
            logger.error("Cannot project booking %s: %s", booking_id, exc)
            self.detail_error = str(exc)
        return self.detail

    def dismiss(self) -> None:
        self.selected = None
        self.detail = None
        self.detail_error = None

    def create_booking(self) -> None:
        """Open the new-booking form; the selected day is not passed along."""
        if self.on_create_booking is None:
            logger.debug("No create-booking handler registered")
            return
        self.on_create_booking()

    @staticmethod
    def tones_for(booking: Booking) -> ToneTriple:
        return resolve_tones(booking)

    # ------------------------------------------------------------------
    # fetching

    def _issue_token(self) -> int:
        self._latest_token += 1
        return self._latest_token

    def _is_latest(self, token: int) -> bool:
        return token == self._latest_token

    async def _fetch(self) -> bool:
        token = self._issue_token()
        mode = self.mode
        anchor = self.anchor
        today = self.clock.today()
        window = self.current_window()
        self.loading = True
        logger.debug("Issuing fetch #%s for %s view %s → %s", token, mode.value, window.start, window.end)
        try:
            bookings = await self.store.fetch_bookings(window.start, window.end)
        except BookingStoreError as exc:
            if self._is_latest(token):
                logger.warning("Failed to fetch bookings for %s → %s: %s", window.start, window.end, exc)
                self.last_error = str(exc)
            else:
                logger.debug("Ignoring failure of superseded fetch #%s", token)
            return False
        else:
            if not self._is_latest(token):
                logger.debug("Discarding stale response for fetch #%s (latest #%s)", token, self._latest_token)
                return False
            self._apply(window, bookings, mode=mode, anchor=anchor, today=today)
            logger.debug("Applied fetch #%s with %s bookings", token, len(self.bookings))
            return True
        finally:
            if self._is_latest(token):
                self.loading = False

    def _apply(
        self,
        window: ViewWindow,
        bookings: List[Booking],
        *,
        mode: ViewMode,
        anchor: date,
        today: date,
    ) -> None:
        self.window = window
        self.bookings = list(bookings)
        self.last_error = None
        if mode is ViewMode.LIST:
            self.rows = build_list(self.bookings, today=today)
            self.cells = []
        else:
            self.cells = build_grid(window, self.bookings, mode=mode, anchor=anchor, today=today)
            self.rows = []


__all__ = ["CalendarController"]
