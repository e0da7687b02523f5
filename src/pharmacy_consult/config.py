"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    sync_base_url: str = "https://jsonblob.example.invalid/api"
    sync_poll_interval_seconds: float = 30.0
    sync_pull_timeout_seconds: float = 5.0
    data_dir: str = "data"
    record_retention_years: int = 3
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
