"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from lang_getter.services.fan_out import DEFAULT_CONCURRENCY


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_api_url: str = "https://api.github.com"
    github_token: SecretStr | None = None
    max_concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    per_page: int = Field(default=100, ge=1, le=100)
    request_timeout: float = 30.0
    user_agent: str = "lang-getter/1.0"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
