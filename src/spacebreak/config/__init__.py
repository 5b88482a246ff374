"""Configuration for SPACEBREAK."""

from .settings import Settings, DisplaySettings, GameplaySettings, get_settings

__all__ = ["Settings", "DisplaySettings", "GameplaySettings", "get_settings"]
