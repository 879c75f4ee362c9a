"""
Agent Health Settings
Pydantic-based configuration with support for env vars and config files.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
    )

    name: str = Field(default="agent-health", alias="APP_NAME")
    env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class HealthSettings(BaseSettings):
    """
    Fleet control health reporting settings.

    Values are passed to the reporter as-is; the reporter decides whether
    reporting is enabled and how to read the interval.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
    )

    fleet_id: Optional[str] = Field(default=None, alias="NEW_RELIC_SUPERAGENT_FLEET_ID")
    delivery_location: Optional[str] = Field(
        default=None,
        alias="NEW_RELIC_SUPERAGENT_HEALTH_DELIVERY_LOCATION",
    )
    frequency: Optional[str] = Field(
        default=None,
        alias="NEW_RELIC_SUPERAGENT_HEALTH_FREQUENCY",
    )

    @field_validator("fleet_id", "frequency", mode="before")
    @classmethod
    def coerce_to_text(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class Settings(BaseSettings):
    """
    Main settings class that aggregates all config sections.

    Usage:
        from agent_health.config import get_settings

        settings = get_settings()
        print(settings.app.log_level)
        print(settings.health.delivery_location)
    """

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    health: HealthSettings = Field(default_factory=HealthSettings)

    def __init__(self, **data):
        super().__init__(**data)
        # Sub-settings read the same environment
        self.app = AppSettings()
        self.health = HealthSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: The application settings
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload settings (clears cache).

    Returns:
        Settings: Fresh settings instance
    """
    get_settings.cache_clear()
    return get_settings()
