"""
Agent Health Configuration Module
Centralized configuration management using pydantic-settings.
"""

from agent_health.config.settings import (
    Settings,
    AppSettings,
    HealthSettings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "AppSettings",
    "HealthSettings",
    "get_settings",
    "reload_settings",
]
