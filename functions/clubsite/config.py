"""
Configuration and settings for the club data service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the API and the sync client."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Admin login
    auth_password: Optional[str] = Field(default=None, env="AUTH_PASSWORD")
    auth_token_ttl_seconds: int = Field(
        default=86400, env="AUTH_TOKEN_TTL_SECONDS"
    )

    # Key-value backends
    redis_url: Optional[str] = Field(default=None, env="REDIS_URL")
    redis_key_prefix: str = Field(default="wotc:", env="REDIS_KEY_PREFIX")
    database_url: Optional[str] = Field(default=None, env="DATABASE_URL")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, env="USE_IN_MEMORY_BACKENDS"
    )

    # Sync client
    remote_api_url: str = Field(
        default="http://localhost:8000/api", env="REMOTE_API_URL"
    )
    request_timeout_seconds: float = Field(
        default=30.0, env="REQUEST_TIMEOUT_SECONDS"
    )

    # Content
    default_post_author: str = Field(
        default="Marcy Borr", env="DEFAULT_POST_AUTHOR"
    )

    log_level: str = Field(default="INFO", env="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
