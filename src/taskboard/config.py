"""Application configuration using environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root once so that `.env` is discovered regardless of CWD
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Load configuration from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default_factory=lambda: Path("data/taskboard.db"),
        validation_alias=AliasChoices("DATABASE_PATH", "database_path"),
    )
    custom_repeat_window_days: int = Field(
        default=7,
        ge=1,
        validation_alias=AliasChoices(
            "CUSTOM_REPEAT_WINDOW_DAYS",
            "custom_repeat_window_days",
        ),
        description="Length of the default window installed for custom repeats.",
    )
    draft_session_ttl_seconds: int = Field(
        default=3600,
        ge=1,
        validation_alias=AliasChoices(
            "DRAFT_SESSION_TTL_SECONDS",
            "draft_session_ttl_seconds",
        ),
        description="Idle time after which an unsubmitted draft session is discarded.",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )
    log_file: Optional[Path] = Field(
        default=None,
        validation_alias=AliasChoices("LOG_FILE", "log_file"),
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        validation_alias=AliasChoices("CORS_ORIGINS", "cors_origins"),
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "PROJECT_ROOT"]
