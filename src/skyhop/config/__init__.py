"""Configuration for SKYHOP."""

from .settings import (
    ConfigurationError,
    DisplaySettings,
    GameSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigurationError",
    "DisplaySettings",
    "GameSettings",
    "Settings",
    "get_settings",
]
