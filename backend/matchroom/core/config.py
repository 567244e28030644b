from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from ``MATCHROOM_*`` env vars or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="MATCHROOM_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "Matchroom Backend"
    cors_origins: List[str] = Field(default_factory=list)
    log_level: str = "INFO"

    # Once more than this many female sessions are registered, two female
    # requesters may be paired with each other.
    female_match_threshold: int = Field(default=500, ge=0)


@lru_cache
def get_settings() -> Settings:
    return Settings()
