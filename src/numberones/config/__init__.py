"""Configuration module for numberones."""

from .settings import (
    BackfillSettings,
    CacheSettings,
    ChartSourceSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
)

__all__ = [
    "BackfillSettings",
    "CacheSettings",
    "ChartSourceSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
]
