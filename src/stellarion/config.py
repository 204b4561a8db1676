"""Lightweight configuration for the Stellarion tools."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(
        env_prefix="STELLARION_", env_file=".env", env_file_encoding="utf-8"
    )

    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    log_level: str = Field(default="info", description="Log level passed to the server")
    max_units_per_side: int = Field(
        default=5000,
        description="Largest army the simulation endpoint accepts on either side",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
