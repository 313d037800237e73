"""Dispatch slot announcements to the configured channels."""

from __future__ import annotations

from typing import Dict, Optional, Sequence

import httpx
import structlog

from .config import Settings
from .models import Slot
from .telegram import format_message, post_to_telegram
from .webhook import post_to_webhook

LOGGER = structlog.get_logger(__name__)


async def notify(
    slots: Sequence[Slot],
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, bool]:
    """
    Deliver ``slots`` to every configured channel, one after another.

    Returns the outcome per attempted channel. A failing channel is logged
    and does not stop the others; nothing is retried.
    """
    outcome: Dict[str, bool] = {}
    if not slots:
        return outcome

    if settings.telegram_enabled:
        try:
            message = format_message(slots, str(settings.url))
            await post_to_telegram(settings, message, transport=transport)
            outcome["telegram"] = True
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("notify.telegram_failed", error=str(exc))
            outcome["telegram"] = False
    else:
        LOGGER.debug("notify.telegram_skipped")

    if settings.webhook_url:
        try:
            await post_to_webhook(str(settings.webhook_url), slots, transport=transport)
            outcome["webhook"] = True
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("notify.webhook_failed", error=str(exc))
            outcome["webhook"] = False
    else:
        LOGGER.debug("notify.webhook_skipped")

    if not outcome:
        LOGGER.warning("notify.no_channels", slots=len(slots))
    return outcome
