"""JSON persistence for the slot baseline."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Mapping

import structlog
from pydantic import TypeAdapter, ValidationError

from .models import BaselineEntry

LOGGER = structlog.get_logger(__name__)

_BASELINE = TypeAdapter(Dict[str, BaselineEntry])


def load_baseline(path: Path) -> Dict[str, BaselineEntry]:
    """Load the baseline, treating a missing or unreadable file as empty."""
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError:
        LOGGER.info("state.load.missing", path=str(path))
        return {}
    except OSError as exc:
        LOGGER.warning("state.load.unreadable", path=str(path), error=str(exc))
        return {}

    try:
        baseline = _BASELINE.validate_json(data.decode("utf-8"))
    except UnicodeDecodeError as exc:
        LOGGER.warning("state.load.invalid", path=str(path), error=str(exc))
        return {}
    except ValidationError as exc:
        LOGGER.warning("state.load.invalid", path=str(path), errors=exc.error_count())
        return {}

    LOGGER.info("state.load.success", path=str(path), entries=len(baseline))
    return baseline


def save_baseline(path: Path, baseline: Mapping[str, BaselineEntry]) -> None:
    """Replace the whole baseline file with ``baseline``."""
    path = Path(path)
    payload = {key: entry.model_dump(mode="json", by_alias=True) for key, entry in baseline.items()}
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    LOGGER.info("state.save.success", path=str(path), entries=len(payload))
