"""Compare the current slots with the persisted baseline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence

import structlog

from .models import BaselineEntry, Slot

LOGGER = structlog.get_logger(__name__)


@dataclass
class DiffResult:
    """Slots worth announcing plus the baseline to persist for the next run."""

    new_or_increased: List[Slot] = field(default_factory=list)
    next_baseline: Dict[str, BaselineEntry] = field(default_factory=dict)


def slot_key(slot: Slot) -> str:
    return slot.key


def diff_slots(
    filtered: Sequence[Slot],
    baseline: Mapping[str, Slot],
    *,
    saved_at: Optional[datetime] = None,
) -> DiffResult:
    """
    Report slots that are new or show more seats than in ``baseline``.

    Every slot is judged against the baseline as it was before this run, so
    two slots sharing a key can both be reported. The next baseline is built
    from ``filtered`` alone; on a key collision the later slot wins. Seat
    decreases are not reported.
    """
    stamp = saved_at or datetime.now(timezone.utc)
    result = DiffResult()

    for slot in filtered:
        key = slot_key(slot)
        previous = baseline.get(key)
        if previous is None:
            LOGGER.debug("diff.new", key=key, level=slot.level.value)
            result.new_or_increased.append(slot)
        elif previous.total_seats < slot.total_seats:
            LOGGER.debug("diff.increased", key=key, before=previous.total_seats, after=slot.total_seats)
            result.new_or_increased.append(slot)
        result.next_baseline[key] = BaselineEntry(**slot.model_dump(exclude={"saved_at"}), saved_at=stamp)

    LOGGER.info(
        "diff.complete",
        current=len(filtered),
        baseline=len(baseline),
        changed=len(result.new_or_increased),
    )
    return result
