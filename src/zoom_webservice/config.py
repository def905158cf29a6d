"""Webservice configuration via Pydantic BaseSettings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    development = "development"
    staging = "staging"
    production = "production"


class Settings(BaseSettings):
    """Webservice settings loaded from environment variables and .env file.

    Empty strings mean "not configured"; the client constructor decides which
    of them are fatal.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment
    ENVIRONMENT: Environment = Environment.development

    # Logging
    LOG_LEVEL: str = "INFO"

    # Zoom JWT app credentials
    ZOOM_API_KEY: str = ""
    ZOOM_API_SECRET: str = ""
    ZOOM_API_URL: str = "https://api.zoom.us/v2/"

    # License recycling
    ZOOM_RECYCLE_LICENSES: bool = False
    ZOOM_LICENSES_COUNT: int | None = None

    # Request shaping
    ZOOM_MAX_RECORDS_PER_CALL: int = 300
    ZOOM_REQUEST_TIMEOUT: float = 30.0

    # Site timezone sent with meeting payloads; empty falls back to the process zone
    TIMEZONE: str = ""


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
