"""Generic JSON webhook delivery."""

from __future__ import annotations

from typing import Any, Iterable, Optional

import httpx
import structlog

from .models import Slot

LOGGER = structlog.get_logger(__name__)


def build_payload(slots: Iterable[Slot]) -> dict[str, Any]:
    """Webhook body: ``{"tickets": [...]}`` with camelCase slot fields."""
    return {"tickets": [slot.model_dump(mode="json", by_alias=True) for slot in slots]}


async def post_to_webhook(
    url: str,
    slots: Iterable[Slot],
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """POST the slots to the configured endpoint."""
    payload = build_payload(slots)
    LOGGER.info("webhook.send.start", tickets=len(payload["tickets"]))

    async with httpx.AsyncClient(timeout=15.0, transport=transport, follow_redirects=True) as client:
        response = await client.post(url, json=payload)
    if response.is_success:
        LOGGER.info("webhook.send.success", status_code=response.status_code)
        return
    LOGGER.error("webhook.send.failed", status_code=response.status_code, body=response.text[:500])
    raise RuntimeError(f"Webhook send failed with {response.status_code}")
