"""Entry point for the slot agent."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date as date_type
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError
from pydantic_settings import SettingsError

from .config import Settings
from .pipeline import run_check
from .selection import resolve_effective_config
from .utils import today_in_timezone


def configure_logging(level: int = logging.INFO) -> None:
    """Configure structlog + stdlib logging."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


LOGGER = structlog.get_logger(__name__)


def _iso_date(value: str) -> date_type:
    try:
        return date_type.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date: {value} (expected YYYY-MM-DD)") from exc


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """CLI argument parsing."""
    parser = argparse.ArgumentParser(description="Watch WavePark seat availability and announce new openings.")
    parser.add_argument(
        "--date",
        dest="dates",
        action="append",
        type=_iso_date,
        help="ISO date (YYYY-MM-DD) to watch; repeat for several. Replaces the configured dates.",
    )
    parser.add_argument(
        "--all-dates",
        action="store_true",
        default=None,
        help="Announce slots on every date shown on the page.",
    )
    parser.add_argument(
        "--include-today",
        action="store_true",
        default=None,
        help="Also watch today's date in the configured timezone.",
    )
    parser.add_argument("--state-file", type=Path, help="Path of the baseline JSON file.")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logs plus a screenshot and DOM dump of the rendered page.",
    )
    return parser.parse_args(argv)


def cli(argv: Optional[list[str]] = None) -> int:
    """Console script entrypoint."""
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.INFO)

    try:
        settings = Settings()
    except (ValidationError, SettingsError) as exc:
        LOGGER.exception("settings.error", error=str(exc))
        return 2

    updates: dict[str, object] = {}
    if args.state_file is not None:
        updates["state_file"] = args.state_file
    if args.debug:
        updates["debug"] = True
    if updates:
        settings = settings.model_copy(update=updates)

    config = resolve_effective_config(
        settings,
        today_in_timezone(settings.timezone),
        target_dates=args.dates,
        include_all_dates=args.all_dates,
        include_today=args.include_today,
    )

    try:
        result = asyncio.run(run_check(settings, config=config))
    except Exception as exc:
        LOGGER.exception("check.failed", error=str(exc))
        return 1

    LOGGER.info(
        "check.complete",
        reconstructed=len(result.slots),
        selected=len(result.selected),
        announced=len(result.new_or_increased),
        notifications=result.notifications,
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli())
