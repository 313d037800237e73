"""One end-to-end availability check."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional

import httpx
import structlog

from .config import Settings
from .diff import diff_slots
from .models import Slot
from .notifier import notify
from .playwright_client import PageRenderer
from .reconstructor import reconstruct
from .selection import EffectiveConfig, resolve_effective_config, select_slots
from .state_store import load_baseline, save_baseline
from .utils import today_in_timezone

LOGGER = structlog.get_logger(__name__)


@dataclass
class RunResult:
    """What a single check saw and announced."""

    slots: List[Slot] = field(default_factory=list)
    selected: List[Slot] = field(default_factory=list)
    new_or_increased: List[Slot] = field(default_factory=list)
    notifications: Dict[str, bool] = field(default_factory=dict)


async def run_check(
    settings: Settings,
    *,
    config: Optional[EffectiveConfig] = None,
    today: Optional[date] = None,
    renderer_factory: Callable[[Settings], PageRenderer] = PageRenderer,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RunResult:
    """
    Render the page, rebuild the slots and announce what changed.

    The baseline is written last, so any failure before that point leaves
    the previous baseline in place. Runs must not overlap: the read and the
    write of the state file are not atomic together.
    """
    if config is None:
        config = resolve_effective_config(settings, today or today_in_timezone(settings.timezone))
    LOGGER.info(
        "check.start",
        url=str(settings.url),
        target_dates=list(config.target_dates),
        target_levels=sorted(level.value for level in config.target_levels),
        include_all_dates=config.include_all_dates,
    )

    async with renderer_factory(settings) as renderer:
        page = await renderer.render(str(settings.url))

    slots = reconstruct(
        page.fragments,
        year_hint=config.year_hint,
        default_date=config.default_date,
        levels=config.target_levels,
        proximity_threshold=settings.proximity_threshold,
    )
    selected = select_slots(slots, config)
    LOGGER.info("check.slots", reconstructed=len(slots), selected=len(selected))

    baseline = load_baseline(settings.state_file)
    result = diff_slots(selected, baseline)

    notifications: Dict[str, bool] = {}
    if result.new_or_increased:
        LOGGER.info("check.changes_found", count=len(result.new_or_increased))
        notifications = await notify(result.new_or_increased, settings, transport=transport)
    else:
        LOGGER.info("check.no_changes")

    save_baseline(settings.state_file, result.next_baseline)

    return RunResult(
        slots=slots,
        selected=selected,
        new_or_increased=result.new_or_increased,
        notifications=notifications,
    )
