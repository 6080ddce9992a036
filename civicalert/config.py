"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage
    incident_store: Literal["memory", "database"] = "memory"
    database_url: str = "postgresql+asyncpg://localhost:5432/civicalert"

    # Mock data seeded into an empty store on startup
    seed_mock_incidents: int = 25
    mock_seed: int | None = None

    # Auth
    secret_key: str = "change-me-in-production"
    access_token_expire_minutes: int = 1440

    # API settings
    api_v1_prefix: str = "/api/v1"
    cors_origins: list[str] = ["*"]  # Restrict in production
    rate_limit_per_minute: int = 60

    # Environment
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
