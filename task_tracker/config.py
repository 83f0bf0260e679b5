"""Application configuration using pydantic-settings.

Values come from (later overrides earlier):
1. Defaults in the Settings class
2. A ``.env`` file in the working directory
3. Environment variables prefixed with TASK_TRACKER_
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASK_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Task Tracker API"
    debug: bool = False

    # Storage
    storage_backend: Literal["json", "sqlite"] = "json"
    json_path: Path = Path("tasks.json")
    sqlite_path: Path = Path("tasks.db")

    # Export
    export_base_name: str = "tasks"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["structured", "simple"] = "simple"
    log_file: Path | None = None

    # Server
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
