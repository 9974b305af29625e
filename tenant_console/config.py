"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application Settings
    app_env: str = "development"
    debug: bool = True
    app_name: str = "Tenant Console"
    log_level: str = "INFO"

    # Platform backend
    platform_api_url: str = "http://localhost:3000/pl1-platform-api"
    platform_api_timeout: float = 15.0

    # Log fetch sizes
    endpoint_logs_limit: int = 800
    global_logs_limit: int = 500

    # Error summary
    error_window_hours: int = 24
    top_tenants_limit: int = 5
    latest_errors_limit: int = 6


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
