"""
Game settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups are addressed with a double underscore, for example
``FLAPPY_PHYSICS__GRAVITY=0.3`` or ``FLAPPY_DISPLAY__FPS=30``.
"""

import math
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseModel):
    """Actor physics. Units are pixels and pixels per tick."""

    gravity: float = Field(default=0.25, gt=0.0)
    flap_velocity: float = Field(default=-4.5, lt=0.0)

    # Tilt (degrees in config, radians at runtime)
    nose_up_degrees: float = Field(default=-25.0, lt=0.0)
    max_nose_down_degrees: float = Field(default=90.0, gt=0.0)
    tilt_step: float = Field(default=0.04, ge=0.0)  # radians per falling tick

    # Actor geometry
    actor_x: float = 50.0
    actor_rest_y: float = 150.0
    actor_radius: float = Field(default=15.0, gt=0.0)

    # Idle bobbing
    bob_amplitude: float = 5.0
    bob_period_ms: float = Field(default=300.0, gt=0.0)

    @property
    def nose_up_angle(self) -> float:
        return math.radians(self.nose_up_degrees)

    @property
    def max_nose_down_angle(self) -> float:
        return math.radians(self.max_nose_down_degrees)


class ObstacleSettings(BaseModel):
    """Obstacle-pair geometry and cadence."""

    speed: float = Field(default=2.5, gt=0.0)
    spawn_interval: int = Field(default=120, gt=0)  # ticks
    gap_height: float = Field(default=170.0, gt=0.0)
    width: float = Field(default=60.0, gt=0.0)
    min_segment_length: int = Field(default=50, ge=0)


class ParallaxSettings(BaseModel):
    """Background scroll (slower than the obstacles)."""

    speed: float = Field(default=1.0, ge=0.0)


class DisplaySettings(BaseModel):
    """Window and frame rate."""

    width: int = Field(default=480, gt=0)
    height: int = Field(default=640, gt=0)
    fps: int = Field(default=60, gt=0)
    title: str = "Flappy"
    resizable: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAPPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    log_file: Path | None = None

    # Persistence
    data_path: Path = Field(default_factory=lambda: Path.home() / ".flappy")
    best_score_file: str = "best_score.json"

    # Fixed seed for reproducible obstacle layouts
    seed: int | None = None

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    parallax: ParallaxSettings = Field(default_factory=ParallaxSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def best_score_path(self) -> Path:
        """Full path of the persisted best-score record."""
        return self.data_path / self.best_score_file


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
