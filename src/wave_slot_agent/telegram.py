"""Telegram messaging helper."""

from __future__ import annotations

from html import escape
from typing import Dict, Iterable, List, Optional

import httpx
import structlog

from .config import Settings
from .models import Level, Slot

LOGGER = structlog.get_logger(__name__)

SEPARATOR = "━━━━━━━━━━━━━━"


def group_by_level(slots: Iterable[Slot]) -> Dict[Level, List[Slot]]:
    """Group slots by level, keeping first-seen level order and slot order."""
    grouped: Dict[Level, List[Slot]] = {}
    for slot in slots:
        grouped.setdefault(slot.level, []).append(slot)
    return grouped


def format_message(slots: Iterable[Slot], page_url: str) -> str:
    """Build the HTML message announcing the available slots."""
    lines: list[str] = ["🏄 <b>웨이브파크 티켓 예매 가능!</b>", ""]

    for level, level_slots in group_by_level(slots).items():
        lines.append(f"<b>[{escape(level.value)}]</b>")
        for slot in level_slots:
            lines.extend(format_slot(slot))
            lines.append(SEPARATOR)
        lines.append("")

    lines.append(f'🔗 <a href="{escape(page_url, quote=True)}">지금 바로 예매하기</a>')
    return "\n".join(lines)


def format_slot(slot: Slot) -> list[str]:
    """Format a single slot as message lines."""
    return [
        f"📅 날짜: {escape(slot.date)}",
        f"⏰ 시간: {escape(slot.time)}",
        f"🎫 잔여: 좌측 {slot.left_seats} / 우측 {slot.right_seats}",
    ]


async def post_to_telegram(
    settings: Settings,
    text: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """Send the composed message to Telegram."""
    payload = {
        "chat_id": settings.telegram_chat_id,
        "text": text,
        "parse_mode": "HTML",
        "disable_web_page_preview": True,
    }

    url = f"{settings.telegram_api_endpoint}/sendMessage"
    LOGGER.info("telegram.send.start", chat_id=settings.telegram_chat_id)

    async with httpx.AsyncClient(timeout=15.0, transport=transport) as client:
        response = await client.post(url, json=payload)
    if response.is_success:
        LOGGER.info("telegram.send.success")
        return
    LOGGER.error("telegram.send.failed", status_code=response.status_code, body=response.text)
    raise RuntimeError(f"Telegram send failed with {response.status_code}: {response.text}")
