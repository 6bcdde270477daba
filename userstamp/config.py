"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite://",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    sql_echo: bool = Field(
        default=False,
        description="Log every SQL statement emitted by the engine",
    )
    current_user_source: Literal["session", "context"] = Field(
        default="session",
        description=(
            "Where the default stamper reads the acting user id from: the owning "
            "session's info or the current execution context"
        ),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
