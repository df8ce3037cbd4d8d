from __future__ import annotations

from agency_calendar.bookings import Booking
from agency_calendar.views.colors import (
    PALETTE,
    ToneTriple,
    name_hash,
    palette_tones,
    parse_hex_color,
    resolve_tones,
)


def _booking(property_name: str, owner_color: str | None = None) -> Booking:
    return Booking(
        id="b-1",
        guest_name="Guest",
        property_name=property_name,
        check_in_date="2026-02-25",
        owner_color=owner_color,
    )


def test_same_property_without_owner_color_gets_same_tones():
    first = resolve_tones(_booking("Sarova Stanley"))
    second = resolve_tones(_booking("Sarova Stanley"))

    assert first == second
    assert first in PALETTE


def test_resolution_is_repeatable_for_one_booking():
    booking = _booking("Mara Serena", owner_color="#2563EB")

    assert resolve_tones(booking) == resolve_tones(booking)


def test_owner_color_derives_three_tones():
    tones = resolve_tones(_booking("Sarova Stanley", owner_color="#2563eb"))

    assert tones == ToneTriple(
        background="rgba(37, 99, 235, 0.08)",
        border="rgba(37, 99, 235, 0.2)",
        foreground="#2563eb",
    )


def test_short_hex_owner_color_is_expanded():
    assert parse_hex_color("#0f8") == (0, 255, 136)
    assert parse_hex_color("abcdef") == (171, 205, 239)


def test_malformed_owner_color_falls_back_to_palette():
    booking = _booking("Sarova Stanley", owner_color="blue-ish")

    assert resolve_tones(booking) == palette_tones("Sarova Stanley")


def test_name_hash_matches_rolling_formula():
    assert name_hash("") == 0
    assert name_hash("a") == 97
    # 98 + ((97 << 5) - 97)
    assert name_hash("ab") == 3105
    assert palette_tones("a") == PALETTE[1]
    assert palette_tones("ab") == PALETTE[3]


def test_name_hash_wraps_shift_to_32_bits():
    # Values produced by the same loop in a JavaScript engine.
    assert name_hash("Sarova Stanley") == -3005041688
    assert palette_tones("Sarova Stanley") == PALETTE[2]


def test_name_hash_walks_utf16_code_units():
    name = "Hemingways Nairobi Luxury Boutique Hotel & Spa" * 20 + "😀"

    assert name_hash(name) == 29661669703
    assert palette_tones(name) == PALETTE[1]


def test_empty_property_name_uses_default_key():
    assert palette_tones("") == palette_tones("default")
    assert palette_tones("") == PALETTE[3]
