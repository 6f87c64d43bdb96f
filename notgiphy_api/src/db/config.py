from __future__ import annotations

import re

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Database configuration.

    Reads from environment variables (or .env via pydantic-settings):
      - DATABASE_URL: SQLAlchemy URL. SQLite (default) and PostgreSQL are supported;
        plain `sqlite://` and `postgresql://` URLs are switched to their async drivers.
      - SQL_ECHO: echo SQL statements.
    """

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./notgiphy.db",
        description="SQLAlchemy database URL",
    )

    # SQLAlchemy engine options
    SQL_ECHO: bool = Field(
        default=False, description="Echo SQL statements for debugging (default False)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def async_database_url(self) -> str:
        """
        Convert the configured URL to an async-driver SQLAlchemy URL, required for AsyncEngine.
        """
        url = self.DATABASE_URL
        if url.startswith("sqlite"):
            return re.sub(r"^sqlite(\+\w+)?://", "sqlite+aiosqlite://", url)
        return re.sub(r"^postgres(ql)?(\+\w+)?://", "postgresql+asyncpg://", url)


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return database settings read from the current environment."""
    return Settings()
