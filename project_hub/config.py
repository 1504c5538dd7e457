"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Location written by the companion project tracker
DEFAULT_DB_PATH = (
    Path.home() / "AppData" / "Local" / "MCP" / "data" / "project_hub" / "project_hub.db"
)

ASYNC_DRIVERS = ("sqlite+aiosqlite",)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_env: str = "development"
    app_debug: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001

    # Database
    database_url: str = f"sqlite+aiosqlite:///{DEFAULT_DB_PATH.as_posix()}"
    database_echo: bool = False
    create_schema: bool = True

    # Commit authorship
    system_author_name: str = "System"
    system_author_email: str = "system@example.com"
    default_author_name: str = "Unknown"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    @field_validator("database_url", mode="after")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Ensure database URL is set and uses an async driver."""
        if not v:
            raise ValueError("database_url must be set via DATABASE_URL environment variable")
        if not v.startswith(ASYNC_DRIVERS):
            raise ValueError(
                f"database_url must use an async driver ({', '.join(ASYNC_DRIVERS)})"
            )
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
