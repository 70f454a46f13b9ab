"""Environment-driven configuration helpers for Golfbank."""

from __future__ import annotations

import os
from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field(default="INFO")
    money_quantum: Decimal = Field(default=Decimal("0.01"), gt=0)

    default_nassau_amount: Decimal = Field(default=Decimal("5"), ge=0)
    default_skins_amount: Decimal = Field(default=Decimal("1"), ge=0)
    default_match_play_amount: Decimal = Field(default=Decimal("1"), ge=0)
    default_stroke_play_amount: Decimal = Field(default=Decimal("1"), ge=0)

    default_closest_to_pin_amount: Decimal = Field(default=Decimal("2"), ge=0)
    default_longest_drive_amount: Decimal = Field(default=Decimal("2"), ge=0)
    default_birdie_bonus_amount: Decimal = Field(default=Decimal("1"), ge=0)
    default_sandy_amount: Decimal = Field(default=Decimal("2"), ge=0)
    default_greenie_amount: Decimal = Field(default=Decimal("2"), ge=0)

    default_slope_rating: float = Field(default=113.0, gt=0)
    default_course_rating: float = Field(default=72.0, gt=0)
    default_tee_box: str = Field(default="white")

    golfbank_api_key: str = Field(default="", validation_alias="GOLFBANK_API_KEY")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_api_access_key() -> str | None:
    """Return the configured API key, or ``None`` when the API is open."""

    return os.getenv("GOLFBANK_API_KEY") or get_settings().golfbank_api_key or None
