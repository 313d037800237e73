from __future__ import annotations

from typing import Optional

from wave_slot_agent.models import Fragment, FragmentContext


def frag(text: str, style: Optional[str] = None, seat: bool = False) -> Fragment:
    return Fragment(text=text, context=FragmentContext(style_hint=style, in_seat_region=seat))


def frags(*texts: str) -> list[Fragment]:
    return [frag(text) for text in texts]
