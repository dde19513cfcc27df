"""
settings.py
───────────
Runtime configuration, read from CALENDAR_* environment variables or .env.
"""

import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="CALENDAR_", env_file=".env", extra="ignore")

    APP_NAME: str = "Event Calendar"

    # JSON file backing the event store; empty keeps events in memory only
    DATA_FILE: str = os.path.join(_BASE_DIR, "data", "events.json")

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
