"""Read-only client for the booking store's REST interface."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, TYPE_CHECKING

import httpx

from agency_calendar.bookings import Booking, build_bookings

if TYPE_CHECKING:  # pragma: no cover
    from agency_calendar.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "booking_vouchers"
DEFAULT_OWNER_RELATION = "profiles:consultant_id(full_name,color)"


class BookingStoreError(RuntimeError):
    """Raised when bookings cannot be fetched from the store."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class BookingStore(Protocol):
    """Source of bookings whose check-in falls in ``[start, end]``.

    Implementations should return rows ordered by check-in date and raise
    :class:`BookingStoreError` for any fetch failure.
    """

    async def fetch_bookings(self, start: date, end: date) -> List[Booking]:
        ...


class BookingStoreClient:
    """Fetches bookings whose check-in date falls in an inclusive range."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        table: str = DEFAULT_TABLE,
        owner_relation: Optional[str] = DEFAULT_OWNER_RELATION,
        timeout: float = 15.0,
    ) -> None:
        if not base_url:
            raise ValueError("Booking store base URL must be provided")
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.owner_relation = owner_relation
        self.timeout = timeout
        self.headers: Dict[str, str] = {"Accept": "application/json"}
        if api_key:
            self.headers["apikey"] = api_key
            self.headers["Authorization"] = f"Bearer {api_key}"

    @classmethod
    def from_settings(cls, settings: "Settings") -> "BookingStoreClient":
        if not settings.store_url:
            raise ValueError("CALENDAR_STORE_URL is not configured")
        return cls(
            base_url=settings.store_url,
            api_key=settings.store_api_key,
            table=settings.bookings_table,
            owner_relation=settings.owner_relation,
            timeout=settings.http_timeout_s,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def build_params(self, start: date, end: date) -> List[tuple[str, str]]:
        select = "*"
        if self.owner_relation:
            select = f"*,{self.owner_relation}"
        return [
            ("select", select),
            ("check_in_date", f"gte.{start.isoformat()}"),
            ("check_in_date", f"lte.{end.isoformat()}"),
            ("order", "check_in_date.asc"),
        ]

    async def fetch_bookings(self, start: date, end: date) -> List[Booking]:
        if end < start:
            raise ValueError(f"Range end {end} precedes start {start}")
        logger.info("Fetching bookings with check-in %s → %s", start, end)
        params = self.build_params(start, end)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.endpoint, params=params, headers=self.headers)
                response.raise_for_status()
                payload: Any = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise BookingStoreError(f"Booking store returned HTTP {status}", status=status) from exc
        except httpx.HTTPError as exc:
            raise BookingStoreError(f"Booking store request failed: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise BookingStoreError(f"Booking store URL is invalid: {exc}") from exc
        except ValueError as exc:
            raise BookingStoreError("Booking store response was not JSON") from exc

        if not isinstance(payload, list):
            raise BookingStoreError(f"Unexpected booking store payload type: {type(payload).__name__}")
        bookings = build_bookings(payload)
        logger.debug("Fetched %s bookings (%s rows)", len(bookings), len(payload))
        return bookings


__all__ = [
    "BookingStore",
    "BookingStoreClient",
    "BookingStoreError",
]
