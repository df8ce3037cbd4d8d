"""Runtime plumbing shared by the calendar engine."""

from .clock import Clock, FixedClock, SystemClock
from .logging import configure_logging, reset_logging

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "configure_logging",
    "reset_logging",
]
