"""View modes and the date window each one covers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator


class ViewMode(str, Enum):
    MONTH = "month"
    WEEK = "week"
    LIST = "list"

    @classmethod
    def parse(cls, value: "str | ViewMode") -> "ViewMode":
        if isinstance(value, ViewMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            known = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown view mode '{value}'. Expected one of: {known}") from exc


@dataclass(frozen=True, slots=True)
class ViewWindow:
    """Inclusive date range whose bookings are fetched for a view."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"View window end {self.end} precedes start {self.start}")

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}
