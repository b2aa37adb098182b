"""
Application configuration using pydantic-settings.

Loads settings from environment variables (and optional .env file) with sensible defaults.

Fields loaded (env var names in parentheses):
- app_env (APP_ENV)
- log_level (LOG_LEVEL)
- db_url (DB_URL or DATABASE_URL)
- sqlalchemy_echo (SQLALCHEMY_ECHO)
- allow_origins (ALLOW_ORIGINS, comma-separated or "*")
- app_version (APP_VERSION)
- products_max_limit (PRODUCTS_MAX_LIMIT)

Usage:
    from dispensary.core.config import get_settings
    settings = get_settings()
    print(settings.db_url)
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment / logging
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database URL (accept DB_URL or DATABASE_URL)
    db_url: str = Field(
        default="sqlite:///./dispensary.db",
        validation_alias=AliasChoices("DB_URL", "DATABASE_URL"),
    )
    sqlalchemy_echo: bool = Field(default=False, alias="SQLALCHEMY_ECHO")

    # HTTP surface
    allow_origins: str = Field(default="*", alias="ALLOW_ORIGINS")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Upper bound for the product search page size
    products_max_limit: int = Field(default=500, alias="PRODUCTS_MAX_LIMIT", ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def cors_origins(self) -> List[str]:
        """
        Build the list of allowed CORS origins. Defaults to "*".
        """
        raw = (self.allow_origins or "*").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached Settings instance.
    """
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings"]
