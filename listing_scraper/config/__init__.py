"""Configuration package."""

from .settings import APISettings, ScraperSettings, Settings, settings

__all__ = [
    "APISettings",
    "ScraperSettings",
    "Settings",
    "settings"
]
