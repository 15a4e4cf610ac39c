"""Lightweight settings layer wrapping environment variables with validation.

Does not replace AppConfig; augments it. Only ambient behaviour (logging,
timing) is environment driven; contact defaults live in AppConfig.
"""
from __future__ import annotations
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment settings, read from ``CMAP_*`` variables or a local ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="CMAP_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field("WARNING", description="Console log level")
    log_file: Optional[str] = Field(None, description="Optional rotating log file")
    json_logs: bool = Field(False, description="Serialise log records as JSON lines")
    enable_timing: bool = Field(True, description="Collect build/render timings")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore
