"""Configuration for the game."""

from .settings import (
    DisplaySettings,
    ObstacleSettings,
    ParallaxSettings,
    PhysicsSettings,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "PhysicsSettings",
    "ObstacleSettings",
    "ParallaxSettings",
    "DisplaySettings",
    "get_settings",
]
