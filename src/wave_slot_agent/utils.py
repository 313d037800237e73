"""Small time zone and text helpers."""

from __future__ import annotations

import re
from datetime import date, datetime

import structlog
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOGGER = structlog.get_logger(__name__)


def get_zone(timezone_name: str) -> ZoneInfo:
    """Return a ZoneInfo instance, defaulting to UTC on failure."""
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError):
        LOGGER.warning("timezone.unknown", timezone=timezone_name, fallback="UTC")
        return ZoneInfo("UTC")


def now_in_timezone(timezone_name: str) -> datetime:
    """Current datetime in the configured timezone."""
    return datetime.now(tz=get_zone(timezone_name))


def today_in_timezone(timezone_name: str) -> date:
    """Calendar date for 'today' in the configured timezone."""
    return now_in_timezone(timezone_name).date()


def normalise_whitespace(text: str) -> str:
    """Collapse repeated whitespace into single spaces."""
    return re.sub(r"\s+", " ", text or "").strip()
