"""Rebuild availability slots from the ordered fragment stream.

The booking page carries no structural markup tying a seat count to its
session. The only signal is document order: a seat count belongs to the most
recently seen date, time and level. The reconstruction is a single left fold
over the classified fragments with an immutable accumulator carrying that
running context.

A seat count is bound to the current level when either

* it sits inside the designated seat-count container, or
* it appears fewer than ``proximity_threshold`` positions after the level
  marker that set the current level.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, Mapping, Optional, Sequence

import structlog

from .classifier import classify
from .models import Classification, DateMarker, Fragment, Level, LevelMarker, SeatCount, Slot, TimeMarker

LOGGER = structlog.get_logger(__name__)

PROXIMITY_THRESHOLD = 10
UNKNOWN_TIME = "--:--"


@dataclass(frozen=True)
class ParseState:
    """Running context threaded through the fold."""

    current_date: Optional[str] = None
    current_time: Optional[str] = None
    current_level: Optional[Level] = None
    level_index: Optional[int] = None
    slots: tuple[Slot, ...] = ()


def index_dates(classifications: Sequence[Classification], year_hint: int) -> dict[int, str]:
    """Map the index of every date marker to its ISO date."""
    return {
        index: item.iso(year_hint)
        for index, item in enumerate(classifications)
        if isinstance(item, DateMarker)
    }


def date_at(index: int, date_index: Mapping[int, str], default_date: str) -> str:
    """Date of the nearest marker at or before ``index``, else ``default_date``."""
    preceding = [position for position in date_index if position <= index]
    if not preceding:
        return default_date
    return date_index[max(preceding)]


def reconstruct(
    fragments: Sequence[Fragment],
    *,
    year_hint: int,
    default_date: str,
    levels: Iterable[Level] = (),
    proximity_threshold: int = PROXIMITY_THRESHOLD,
) -> list[Slot]:
    """Return the slots found in ``fragments``, in encounter order.

    ``levels`` restricts the emitted slots to those levels; an empty
    collection keeps every level. Duplicates are not merged here.
    """
    classifications = [classify(fragment) for fragment in fragments]
    date_index = index_dates(classifications, year_hint)
    wanted = frozenset(levels)

    def step(state: ParseState, item: tuple[int, Fragment, Classification]) -> ParseState:
        index, fragment, classification = item

        if isinstance(classification, DateMarker):
            return replace(state, current_date=date_index[index])

        if isinstance(classification, TimeMarker):
            current_date = state.current_date or date_at(index, date_index, default_date)
            return replace(state, current_time=classification.time, current_date=current_date)

        if isinstance(classification, LevelMarker):
            return replace(state, current_level=classification.level, level_index=index)

        if isinstance(classification, SeatCount):
            if not _is_bound(state, index, fragment, proximity_threshold):
                LOGGER.debug("reconstruct.seat_unbound", index=index, text=fragment.text)
                return state
            if state.current_level is None or (wanted and state.current_level not in wanted):
                return state
            if classification.total <= 0:
                return state
            slot = Slot.from_counts(
                date=state.current_date or date_at(index, date_index, default_date),
                time=state.current_time or UNKNOWN_TIME,
                level=state.current_level,
                left=classification.left,
                right=classification.right,
                raw_text=fragment.text,
            )
            return replace(state, slots=state.slots + (slot,))

        return state

    items = zip(range(len(fragments)), fragments, classifications)
    final = reduce(step, items, ParseState())
    LOGGER.debug("reconstruct.complete", fragments=len(fragments), slots=len(final.slots))
    return list(final.slots)


def _is_bound(state: ParseState, index: int, fragment: Fragment, proximity_threshold: int) -> bool:
    if fragment.context.in_seat_region:
        return True
    if state.current_level is None or state.level_index is None:
        return False
    return index - state.level_index < proximity_threshold
