"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables, with an optional .env file
as a fallback. The .env file is gitignored; nothing in here is secret, but the
database URL and CORS allow-list differ between environments.

Pydantic Settings automatically:
  1. Reads from environment variables (highest priority)
  2. Falls back to .env file values
  3. Uses defaults defined here (lowest priority)

Usage:
    from banklite.config import settings
    print(settings.DATABASE_URL)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the BankLite API.

    Every field has a default, so the app boots with an empty environment
    against a local SQLite file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Application ---
    APP_NAME: str = "BankLite Banking System"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # --- Database ---
    # SQLite for development; swap to a postgresql+asyncpg URL for production
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/banklite.db"

    # --- CORS (applies to /api/**) ---
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:4200",
        "http://localhost:8081",
    ]
    CORS_MAX_AGE: int = 3600

    # --- Error handling ---
    # Off by default: AccountNotFoundError escapes as a plain 500.
    # Turn on to get 404 + ErrorResponse bodies.
    ERROR_MAPPER_ENABLED: bool = False

    # --- Logging ---
    LOG_LEVEL: str = "INFO"


# Singleton: import this instance everywhere instead of creating new Settings()
settings = Settings()
