"""
Configuration management for Tree Garden.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from TREE_GARDEN_* environment variables."""

    # Storage
    storage_backend: Literal["json", "sqlite", "memory"] = Field(
        default="json",
        description="Where snapshots are kept: a JSON file, a SQL database or memory only"
    )
    data_dir: str = Field(
        default="~/.tree_garden",
        description="Directory for JSON snapshots"
    )
    database_url: str = Field(
        default="sqlite:///tree_garden.db",
        description="SQLAlchemy URL used when storage_backend is 'sqlite'"
    )
    snapshot_key: str = Field(
        default="treeGameState",
        description="Key the game snapshot is stored under"
    )

    # Game loop
    frame_rate: int = Field(
        default=60,
        gt=0,
        description="Frames per second of the headless game loop"
    )
    autosave_interval_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Wall-clock seconds between autosaves"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )

    # Debug
    debug_mode: bool = Field(
        default=False,
        description="Echo SQL statements and log at DEBUG"
    )

    class Config:
        env_prefix = "TREE_GARDEN_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
