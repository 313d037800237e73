"""Turn rendered page markup into the ordered fragment stream."""

from __future__ import annotations

import re
from typing import List, Optional

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag

from .config import SEAT_REGION_NAME
from .models import Fragment, FragmentContext
from .utils import normalise_whitespace

LOGGER = structlog.get_logger(__name__)

SKIPPED_TAGS = {"script", "style", "noscript", "template"}
BACKGROUND_PATTERN = re.compile(r"background-color\s*:\s*([^;]+)", re.IGNORECASE)


def extract_fragments(html: str) -> List[Fragment]:
    """Return every non-empty text node under ``<body>`` in document order."""
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup

    seat_regions = root.select(f'[data-framer-name="{SEAT_REGION_NAME}"]')
    LOGGER.info("fragments.seat_regions", count=len(seat_regions))

    fragments: List[Fragment] = []
    for node in root.find_all(string=True):
        if type(node) is not NavigableString:
            continue
        if node.parent is not None and node.parent.name in SKIPPED_TAGS:
            continue
        text = normalise_whitespace(str(node))
        if not text:
            continue
        fragments.append(
            Fragment(
                text=text,
                context=FragmentContext(
                    style_hint=background_hint(node),
                    in_seat_region=in_seat_region(node),
                ),
            )
        )

    LOGGER.info("fragments.extracted", count=len(fragments))
    return fragments


def background_hint(node: NavigableString) -> Optional[str]:
    """Background colour of the closest ``div`` ancestor that declares one."""
    for parent in node.parents:
        if not isinstance(parent, Tag) or parent.name != "div":
            continue
        match = BACKGROUND_PATTERN.search(parent.get("style") or "")
        if match:
            return match.group(1).strip()
    return None


def in_seat_region(node: NavigableString) -> bool:
    """Whether any ancestor is the designated seat-count container."""
    return any(
        isinstance(parent, Tag) and parent.get("data-framer-name") == SEAT_REGION_NAME
        for parent in node.parents
    )
