from __future__ import annotations

import json
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application-level settings for the FastAPI service.

    This is separate from src.db.config.Settings, which focuses on the database layer.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="NotGiphy API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Search Giphy, save favorite GIFs and organize them with your own tags. "
            "Serves the single page UI from the static directory."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    # CORS (the UI dev server runs on localhost:4200)
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:4200"],
        description="Comma-separated list or JSON array of allowed origins.",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: List[str] = Field(
        default_factory=lambda: ["POST", "GET", "OPTIONS", "PUT", "DELETE"]
    )
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["*"])

    # Storage
    STORE_BACKEND: str = Field(
        default="sql",
        description="'sql' for the relational store, 'memory' for the in-process map store.",
    )

    # Startup behavior
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(
        default=True,
        description="If true, run Alembic migrations (upgrade head) at app startup.",
    )
    CREATE_SCHEMA_ON_STARTUP: bool = Field(
        default=False,
        description="If true and migrations are disabled, create tables from the ORM metadata.",
    )

    # Static UI bundle
    STATIC_DIR: str = Field(default="./static")

    # Sessions
    SESSION_COOKIE_NAME: str = Field(default="sessionid")
    SESSION_TTL_HOURS: int = Field(default=24, ge=1)
    SESSION_COOKIE_SECURE: bool = Field(default=False)

    # Giphy
    NOTGIPHY_API_KEY: str = Field(default="dc6zaTOxFJmzC")
    GIPHY_BASE_URL: str = Field(default="https://api.giphy.com/v1")
    GIPHY_RESULTS_PER_PAGE: int = Field(default=25)
    GIPHY_RATING: str = Field(default="g")
    GIPHY_TIMEOUT_SECONDS: float = Field(default=10.0)

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=9999)
    LOG_LEVEL: str = Field(default="INFO")

    # Environment label
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["http://localhost:4200"]
        if isinstance(v, str) and v.strip().startswith("["):
            v = json.loads(v)
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["http://localhost:4200"]
        if isinstance(v, list):
            return v or ["http://localhost:4200"]
        return ["http://localhost:4200"]

    @field_validator("STORE_BACKEND", mode="before")
    @classmethod
    def _normalize_backend(cls, v):
        value = str(v or "sql").strip().lower()
        if value not in ("sql", "memory"):
            raise ValueError("STORE_BACKEND must be 'sql' or 'memory'")
        return value


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Note:
      A new instance is built on every call so tests can change the environment
      between application instances.
    """
    return AppSettings()
