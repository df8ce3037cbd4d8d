"""Clock capability so "today" can be pinned in tests and previews."""
from __future__ import annotations

from datetime import date
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date:
        ...


class SystemClock:
    """Reads the local calendar date from the host."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Always reports the same date."""

    def __init__(self, current: date) -> None:
        self.current = current

    def today(self) -> date:
        return self.current

    def set(self, current: date) -> None:
        self.current = current


__all__ = ["Clock", "FixedClock", "SystemClock"]
