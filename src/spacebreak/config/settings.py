"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from typing import Literal, Tuple

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Display-related settings."""

    # Play field (game coordinates)
    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)

    # Window
    scale: float = Field(default=1.0, gt=0.0)
    fullscreen: bool = False
    title: str = "SPACEBREAK"

    # Rendering
    fps: int = Field(default=60, ge=1, le=240)
    background: Tuple[int, int, int] = (23, 107, 170)


class GameplaySettings(BaseModel):
    """Field layout and tuning for the collision response rules."""

    brick_rows: int = Field(default=2, ge=0)
    brick_columns: int = Field(default=5, ge=1)
    spaceship_columns: int = Field(default=3, ge=1)

    ball_speed_up: float = Field(default=0.1, ge=0.0)
    paddle_shrink: float = Field(default=0.25, ge=0.0, lt=1.0)
    paddle_min_width: float = Field(default=50.0, gt=0.0)
    particles_per_explosion: int = Field(default=5, ge=0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPACEBREAK_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    language: Literal["en", "de"] = "en"
    log_file: str | None = None

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
