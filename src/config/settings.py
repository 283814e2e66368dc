"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    app_env: str
    log_level: str
    language: str
    decimal_precision: int


def get_settings() -> Settings:
    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        language=os.getenv("APP_LANG", "en").strip().lower(),
        # 78 digits hold any uint256 token amount without rounding.
        decimal_precision=int(os.getenv("DECIMAL_PRECISION", "78")),
    )


settings = get_settings()
