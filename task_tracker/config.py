"""Application settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from TASK_TRACKER_* environment variables or .env."""

    app_name: str = "Task Tracker"

    # ── Store ──
    database_path: Path = Path("tasks.db")

    # ── HTTP server ──
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # ── Logging ──
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # ── Terminal client ──
    api_base_url: str = "http://127.0.0.1:8000"
    request_timeout: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="TASK_TRACKER_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
