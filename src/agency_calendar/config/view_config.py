"""Saved view presets loaded from TOML."""
from __future__ import annotations

import re
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

try:  # pragma: no cover - Python 3.11+ ships tomllib
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ModuleNotFoundError as exc:  # pragma: no cover
        raise RuntimeError(
            "View configuration loading requires 'tomllib' (Python >=3.11) or the 'tomli' package."
        ) from exc

from agency_calendar.views.modes import ViewMode
from agency_calendar.views.window import add_months, parse_weekday

if TYPE_CHECKING:  # pragma: no cover
    from agency_calendar.config.settings import Settings

_RELATIVE_ANCHOR = re.compile(r"^(?P<sign>[+-])(?P<count>\d+)\s*(?P<unit>[dDwWmM])$")


class ViewSection(BaseModel):
    """Calendar view overrides decoded from the preset."""

    mode: Optional[ViewMode] = None
    anchor: Optional[str] = Field(
        default=None, description="ISO 8601 date or relative offset such as '+1m' or '-2w'"
    )
    first_weekday: Optional[int] = Field(default=None, description="0 (Monday) .. 6 or a weekday name")
    list_horizon_months: Optional[int] = Field(default=None, ge=1)

    @field_validator("mode", mode="before")
    @classmethod
    def _coerce_mode(cls, value: object) -> Optional[ViewMode]:
        if value in (None, ""):
            return None
        return ViewMode.parse(value)  # type: ignore[arg-type]

    @field_validator("first_weekday", mode="before")
    @classmethod
    def _coerce_weekday(cls, value: object) -> Optional[int]:
        if value in (None, ""):
            return None
        return parse_weekday(value)  # type: ignore[arg-type]


class StoreSection(BaseModel):
    """Booking store overrides."""

    url: Optional[str] = None
    table: Optional[str] = None
    timeout_s: Optional[float] = Field(default=None, gt=0)

    @field_validator("url", "table", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ViewConfig(BaseModel):
    """Top-level preset decoded from TOML."""

    profile: str = Field(default="default", description="Human label used for logging")
    view: ViewSection = Field(default_factory=ViewSection)
    store: Optional[StoreSection] = None
    log_level: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "ViewConfig":
        """Load a preset from a TOML file."""
        data = tomllib.loads(path.read_text())
        return cls.model_validate(data)

    def apply_to(self, settings: "Settings") -> None:
        """Apply overrides to an existing Settings instance."""
        view = self.view
        if view.mode is not None:
            settings.default_mode = view.mode
        if view.first_weekday is not None:
            settings.first_weekday = view.first_weekday
        if view.list_horizon_months is not None:
            settings.list_horizon_months = view.list_horizon_months
        if self.log_level:
            settings.log_level = self.log_level

        store = self.store
        if store:
            if store.url is not None:
                settings.store_url = store.url.strip().rstrip("/")
            if store.table is not None:
                settings.bookings_table = store.table
            if store.timeout_s is not None:
                settings.http_timeout_s = store.timeout_s

    def anchor_date(self, today: date) -> Optional[date]:
        if not self.view.anchor:
            return None
        return parse_anchor(self.view.anchor, today=today)


def parse_anchor(value: str, *, today: date) -> date:
    text = value.strip()
    lowered = text.lower()
    if lowered == "today":
        return today
    if lowered.startswith("today"):
        lowered = lowered[len("today"):].strip()
    if lowered[:1] in ("+", "-"):
        match = _RELATIVE_ANCHOR.match(lowered)
        if not match:
            raise ValueError(
                f"Unsupported anchor relative format '{value}'. Use forms like '+14d', '-2w', '+1m'."
            )
        count = int(match.group("count"))
        if match.group("sign") == "-":
            count = -count
        unit = match.group("unit").lower()
        if unit == "d":
            return today + timedelta(days=count)
        if unit == "w":
            return today + timedelta(weeks=count)
        return add_months(today, count)
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(
            f"Invalid anchor date '{value}'. Provide ISO format (YYYY-MM-DD) or a relative offset."
        ) from exc


__all__ = ["ViewConfig", "parse_anchor"]
