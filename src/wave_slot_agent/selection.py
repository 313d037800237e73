"""Resolve the effective watch configuration and select slots of interest."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from .config import Settings
from .models import Level, Slot


@dataclass(frozen=True)
class EffectiveConfig:
    """Immutable view of the selection parameters for one run."""

    target_dates: tuple[str, ...]
    target_levels: frozenset[Level]
    include_all_dates: bool
    year_hint: int
    default_date: str


def resolve_effective_config(
    settings: Settings,
    today: date,
    *,
    target_dates: Optional[Sequence[date]] = None,
    include_all_dates: Optional[bool] = None,
    include_today: Optional[bool] = None,
) -> EffectiveConfig:
    """
    Compute the selection parameters once, before the pipeline runs.

    Keyword overrides (from the command line) take precedence over the
    settings. ``today`` is appended to the target dates when requested, at
    most once. The year for date markers and the fallback date both come from
    the first target date, or from ``today`` when none is configured.
    """
    dates = list(settings.target_dates if target_dates is None else target_dates)
    if settings.include_today if include_today is None else include_today:
        dates = _append_once(dates, today)

    isos = tuple(dict.fromkeys(value.isoformat() for value in dates))
    first = dates[0] if dates else today

    return EffectiveConfig(
        target_dates=isos,
        target_levels=frozenset(settings.target_levels),
        include_all_dates=settings.include_all_dates if include_all_dates is None else include_all_dates,
        year_hint=first.year,
        default_date=first.isoformat(),
    )


def select_slots(slots: Iterable[Slot], config: EffectiveConfig) -> List[Slot]:
    """Keep slots on a target date, or every slot when all dates are included."""
    if config.include_all_dates:
        return list(slots)
    wanted = set(config.target_dates)
    return [slot for slot in slots if slot.date in wanted]


def _append_once(dates: List[date], value: date) -> List[date]:
    if value in dates:
        return dates
    return [*dates, value]
