"""Display tones for bookings on the calendar."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from agency_calendar.bookings.models import Booking

_HEX_COLOR = re.compile(r"^#?(?P<hex>[0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")

BACKGROUND_ALPHA = 0.08
BORDER_ALPHA = 0.2


@dataclass(frozen=True, slots=True)
class ToneTriple:
    background: str
    border: str
    foreground: str

    def to_dict(self) -> dict[str, str]:
        return {"background": self.background, "border": self.border, "foreground": self.foreground}


# blue, green, purple, amber, rose, indigo (50 / 100 / 700 shades)
PALETTE: tuple[ToneTriple, ...] = (
    ToneTriple(background="#eff6ff", border="#dbeafe", foreground="#1d4ed8"),
    ToneTriple(background="#f0fdf4", border="#dcfce7", foreground="#15803d"),
    ToneTriple(background="#faf5ff", border="#f3e8ff", foreground="#7e22ce"),
    ToneTriple(background="#fffbeb", border="#fef3c7", foreground="#b45309"),
    ToneTriple(background="#fff1f2", border="#ffe4e6", foreground="#be123c"),
    ToneTriple(background="#eef2ff", border="#e0e7ff", foreground="#4338ca"),
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_units(text: str) -> list[int]:
    raw = text.encode("utf-16-le")
    return [int.from_bytes(raw[index : index + 2], "little") for index in range(0, len(raw), 2)]


def name_hash(text: str) -> int:
    """Rolling ``charCode + ((hash << 5) - hash)`` with 32-bit shift semantics."""
    value = 0
    for unit in _utf16_units(text):
        value = unit + (_to_int32(_to_int32(value) << 5) - value)
    return value


def palette_tones(name: str) -> ToneTriple:
    return PALETTE[abs(name_hash(name or "default")) % len(PALETTE)]


def parse_hex_color(value: Optional[str]) -> Optional[tuple[int, int, int]]:
    if not value:
        return None
    match = _HEX_COLOR.match(value.strip())
    if not match:
        return None
    digits = match.group("hex")
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def owner_tones(red: int, green: int, blue: int) -> ToneTriple:
    return ToneTriple(
        background=f"rgba({red}, {green}, {blue}, {BACKGROUND_ALPHA})",
        border=f"rgba({red}, {green}, {blue}, {BORDER_ALPHA})",
        foreground=f"#{red:02x}{green:02x}{blue:02x}",
    )


def resolve_tones(booking: Booking) -> ToneTriple:
    """Tones from the owner's colour when it parses, else from the property name."""
    rgb = parse_hex_color(booking.owner_color)
    if rgb is not None:
        return owner_tones(*rgb)
    return palette_tones(booking.property_name)


__all__ = [
    "PALETTE",
    "ToneTriple",
    "name_hash",
    "owner_tones",
    "palette_tones",
    "parse_hex_color",
    "resolve_tones",
]
