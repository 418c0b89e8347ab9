"""Service configuration.

Loaded from environment variables prefixed with `REPORT_OUTLINE_`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REPORT_OUTLINE_",
        env_file=None,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5174", "https://gluwa.github.io"]
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
