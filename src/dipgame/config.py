"""Lightweight configuration for the dipgame tools."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    maps_dir: Path = Field(
        default=Path("maps"), description="Root directory holding one sub-directory per map"
    )
    data_dir: Path = Field(default=Path("games"), description="Where game snapshots live")
    log_level: str = Field(default="WARNING", description="Root log level used by the CLI")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
