from __future__ import annotations

import pytest

ENV_VARS = (
    "WAVEPARK_URL",
    "WAVEPARK_TARGET_DATES",
    "WAVEPARK_TARGET_LEVELS",
    "WAVEPARK_INCLUDE_ALL_DATES",
    "WAVEPARK_INCLUDE_TODAY",
    "WAVEPARK_STATE_FILE",
    "WAVEPARK_TIMEOUT_SECONDS",
    "WAVEPARK_DEBUG",
    "WAVEPARK_DEBUG_DIR",
    "WAVEPARK_HEADLESS",
    "WAVEPARK_SETTLE_MS",
    "WAVEPARK_SEAT_REGION_TIMEOUT_SECONDS",
    "WAVEPARK_PROXIMITY_THRESHOLD",
    "WAVEPARK_TIMEZONE",
    "WEBHOOK_URL",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep real credentials and any local .env file out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
