"""Playwright automation that renders the booking page."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import structlog
from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import SEAT_REGION_NAME, Settings
from .fragments import extract_fragments
from .models import Fragment

LOGGER = structlog.get_logger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]
SCREENSHOT_NAME = "wavepark_screenshot.png"
DOM_DUMP_NAME = "wavepark_dom.html"


@dataclass
class RenderedPage:
    """Markup and fragments captured from the rendered page."""

    url: str
    html: str
    fragments: List[Fragment]


class PageRenderer:
    """Helper that manages a headless Chromium session."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "PageRenderer":
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._settings.headless,
            args=LAUNCH_ARGS,
        )
        context = await self._browser.new_context(
            user_agent=USER_AGENT,
            viewport={"width": 1920, "height": 1080},
        )
        self._page = await context.new_page()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._page:
            await self._page.context.close()
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()

    async def render(self, url: str) -> RenderedPage:
        """Load ``url`` and return its visible text fragments."""
        if not self._page:
            raise RuntimeError("Playwright page has not been initialised")

        LOGGER.info("render.load.start", url=url)
        await self._page.goto(url, wait_until="networkidle", timeout=self._settings.timeout_seconds * 1000)

        # The booking widget fills in client-side after the network settles.
        await self._page.wait_for_timeout(self._settings.settle_ms)

        try:
            await self._page.wait_for_selector(
                f'[data-framer-name="{SEAT_REGION_NAME}"]',
                timeout=self._settings.seat_region_timeout_seconds * 1000,
            )
            LOGGER.info("render.seat_region_found")
        except PlaywrightTimeoutError:
            LOGGER.warning("render.seat_region_missing", url=url)

        html = await self._page.content()
        if self._settings.debug:
            await self._dump_debug(html)

        fragments = extract_fragments(html)
        LOGGER.info("render.load.success", url=url, fragments=len(fragments))
        return RenderedPage(url=url, html=html, fragments=fragments)

    async def _dump_debug(self, html: str) -> None:
        """Write a full-page screenshot and the DOM next to each other."""
        directory = Path(self._settings.debug_dir)
        directory.mkdir(parents=True, exist_ok=True)
        screenshot = directory / SCREENSHOT_NAME
        await self._page.screenshot(path=str(screenshot), full_page=True)
        dom = directory / DOM_DUMP_NAME
        dom.write_text(html, encoding="utf-8")
        LOGGER.info("render.debug_saved", screenshot=str(screenshot), dom=str(dom))
