"""Configuration objects and helpers for the slot agent."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated, Any, List, Optional

from pydantic import Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .models import Level

SEAT_REGION_NAME = "잔여좌우"


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    url: HttpUrl = Field("https://wavepark.framer.website/", validation_alias="WAVEPARK_URL")
    target_dates: Annotated[List[date], NoDecode] = Field(
        default_factory=list,
        validation_alias="WAVEPARK_TARGET_DATES",
        description="Comma separated ISO dates to watch.",
    )
    target_levels: Annotated[List[Level], NoDecode] = Field(
        default_factory=lambda: [Level.ADVANCED],
        validation_alias="WAVEPARK_TARGET_LEVELS",
        description="Comma separated level labels (상급, 중급, 초급) or names; empty means every level.",
    )
    include_all_dates: bool = Field(False, validation_alias="WAVEPARK_INCLUDE_ALL_DATES")
    include_today: bool = Field(False, validation_alias="WAVEPARK_INCLUDE_TODAY")
    webhook_url: Optional[HttpUrl] = Field(None, validation_alias="WEBHOOK_URL")
    telegram_bot_token: Optional[SecretStr] = Field(None, validation_alias="TELEGRAM_BOT_TOKEN")
    telegram_chat_id: Optional[str] = Field(None, validation_alias="TELEGRAM_CHAT_ID")
    state_file: Path = Field(Path("state.json"), validation_alias="WAVEPARK_STATE_FILE")
    headless: bool = Field(True, validation_alias="WAVEPARK_HEADLESS")
    timeout_seconds: int = Field(30, validation_alias="WAVEPARK_TIMEOUT_SECONDS")
    settle_ms: int = Field(5000, validation_alias="WAVEPARK_SETTLE_MS")
    seat_region_timeout_seconds: int = Field(10, validation_alias="WAVEPARK_SEAT_REGION_TIMEOUT_SECONDS")
    proximity_threshold: int = Field(10, ge=1, validation_alias="WAVEPARK_PROXIMITY_THRESHOLD")
    timezone: str = Field("Asia/Seoul", validation_alias="WAVEPARK_TIMEZONE")
    debug: bool = Field(False, validation_alias="WAVEPARK_DEBUG")
    debug_dir: Path = Field(Path("."), validation_alias="WAVEPARK_DEBUG_DIR")

    model_config = SettingsConfigDict(
        env_prefix="WAVEPARK_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("target_dates", mode="before")
    @classmethod
    def split_dates(cls, value: Any) -> Any:
        """Accept ``a,b,c`` strings as well as real lists."""
        return _split_csv(value)

    @field_validator("target_levels", mode="before")
    @classmethod
    def split_levels(cls, value: Any) -> Any:
        """Accept page labels or ``advanced``/``ADVANCED`` style names."""
        value = _split_csv(value)
        if not isinstance(value, list):
            return value
        resolved = []
        for item in value:
            if isinstance(item, str) and item.upper() in Level.__members__:
                resolved.append(Level[item.upper()])
            else:
                resolved.append(item)
        return resolved

    @field_validator("webhook_url", "telegram_bot_token", "telegram_chat_id", mode="before")
    @classmethod
    def blank_as_none(cls, value: Any) -> Any:
        """Treat empty environment values as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @property
    def telegram_api_endpoint(self) -> str:
        """Base Telegram Bot API endpoint."""
        if self.telegram_bot_token is None:
            raise RuntimeError("Telegram bot token is not configured")
        return f"https://api.telegram.org/bot{self.telegram_bot_token.get_secret_value()}"


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value
