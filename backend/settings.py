# backend/settings.py
"""
Configuration for the settlement backend.

Read from SPLITLY_* environment variables or a .env file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SPLITLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    host: str = Field(default="127.0.0.1", description="Interface the dev server binds to")
    port: int = Field(default=5000, ge=1, le=65535)
    debug: bool = False

    log_level: str = Field(default="INFO", description="stdlib logging level name")
    log_json: bool = Field(default=True, description="Render logs as JSON lines")

    currency_symbol: str = Field(
        default="€",
        description="Appended to formatted amounts; empty disables it"
    )
    default_participant_count: int = Field(default=2, ge=1)
    max_participants: int = Field(default=100, ge=1)


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings (cached).

    Call get_settings.cache_clear() to reload after changing the environment.
    """
    return Settings()
