"""Classify rendered text fragments into date/time/level/seat markers."""

from __future__ import annotations

import re
from typing import Optional

from .models import (
    Classification,
    DateMarker,
    Fragment,
    Level,
    LevelMarker,
    SeatCount,
    SoldOut,
    TimeMarker,
    Unrecognized,
)

DATE_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})\s*\([월화수목금토일]\)$", re.ASCII)
TIME_PATTERN = re.compile(r"^\d{2}:00$", re.ASCII)
SEAT_PATTERN = re.compile(r"^(-?\d+|-)/(-?\d+|-)$", re.ASCII)
SOLD_OUT_LABEL = "매진"

LEVEL_LABELS = {level.value: level for level in Level}

# Background colours used by the level badges on the booking page.
LEVEL_COLORS = {
    "rgb(239,68,68)": Level.ADVANCED,
    "#ef4444": Level.ADVANCED,
    "rgb(245,158,11)": Level.INTERMEDIATE,
    "#f59e0b": Level.INTERMEDIATE,
    "rgb(34,197,94)": Level.BEGINNER,
    "#22c55e": Level.BEGINNER,
}


def classify(fragment: Fragment) -> Classification:
    """Return the single classification for ``fragment``."""
    text = fragment.text.strip()

    date_match = DATE_PATTERN.match(text)
    if date_match:
        month, day = int(date_match.group(1)), int(date_match.group(2))
        if 1 <= month <= 12 and 1 <= day <= 31:
            return DateMarker(month=month, day=day)
        return Unrecognized()

    if TIME_PATTERN.match(text):
        return TimeMarker(time=text)

    if text in LEVEL_LABELS:
        hinted = level_from_style(fragment.context.style_hint)
        return LevelMarker(level=hinted or LEVEL_LABELS[text])

    if text == SOLD_OUT_LABEL:
        return SoldOut()

    seat_match = SEAT_PATTERN.match(text)
    if seat_match:
        return SeatCount(left=parse_seat_half(seat_match.group(1)), right=parse_seat_half(seat_match.group(2)))

    return Unrecognized()


def level_from_style(style_hint: Optional[str]) -> Optional[Level]:
    """Map a background colour hint to a level, ignoring case and whitespace."""
    if not style_hint:
        return None
    normalised = re.sub(r"\s+", "", style_hint).lower()
    return LEVEL_COLORS.get(normalised)


def parse_seat_half(value: str) -> int:
    """Parse one side of a ``left/right`` count; ``-`` and malformed values are 0."""
    if value.isascii() and value.isdigit():
        return int(value)
    return 0
