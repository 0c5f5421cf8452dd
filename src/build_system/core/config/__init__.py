"""Configuration management for the build runner."""

from build_system.core.config.loader import ConfigLoader
from build_system.core.config.settings import (
    BuildSettings,
    LayerSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "BuildSettings",
    "ConfigLoader",
    "LayerSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
