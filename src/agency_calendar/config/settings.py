"""Runtime configuration for the calendar engine.

Relies on pydantic-settings so that environment variables (prefixed with ``CALENDAR_``)
can override defaults. See `.env.example` for common values.
"""
from __future__ import annotations

import calendar
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agency_calendar.views.modes import ViewMode
from agency_calendar.views.window import LIST_HORIZON_MONTHS, parse_weekday

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Captures runtime configuration for the calendar engine."""

    store_url: Optional[str] = Field(
        default=None, description="Base URL of the booking store (e.g. https://<project>.supabase.co)"
    )
    store_api_key: Optional[str] = Field(default=None, description="API key sent as apikey/bearer token")
    bookings_table: str = Field(default="booking_vouchers", description="Table holding booking vouchers")
    owner_relation: str = Field(
        default="profiles:consultant_id(full_name,color)",
        description="Embedded relation resolving the creating consultant and their calendar colour",
    )
    http_timeout_s: float = Field(default=15.0, description="Timeout for booking store requests")

    default_mode: ViewMode = Field(default=ViewMode.MONTH)
    first_weekday: int = Field(
        default=calendar.SUNDAY, description="Weekday grids start on (0=Monday .. 6=Sunday)"
    )
    list_horizon_months: int = Field(
        default=LIST_HORIZON_MONTHS, description="Months covered by the rolling List view"
    )

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    log_file: str = Field(default="calendar.log", description="File name written inside log_dir")
    view_config_path: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_prefix="CALENDAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    @field_validator("store_url", mode="before")
    def _strip_store_url(cls, value: str | None) -> Optional[str]:
        if value in (None, ""):
            return None
        return str(value).strip().rstrip("/")

    @field_validator("default_mode", mode="before")
    def _parse_mode(cls, value: object) -> ViewMode:
        return ViewMode.parse(value)  # type: ignore[arg-type]

    @field_validator("first_weekday", mode="before")
    def _parse_weekday(cls, value: int | str) -> int:
        return parse_weekday(value)

    @field_validator("list_horizon_months")
    def _validate_horizon(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("list_horizon_months must be positive")
        return value

    @field_validator("log_dir", mode="before")
    def _expand_log_dir(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    @field_validator("view_config_path", mode="before")
    def _expand_view_config(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def store_configured(self) -> bool:
        if self.store_url and not self.store_api_key:
            logger.debug("Booking store API key not configured; requests will be anonymous")
        return bool(self.store_url)
