"""
Application settings.

Loaded from environment variables (and an optional .env file) through
pydantic-settings. Import the module-level singleton:

    from app.core.config import settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the room ledger service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./roomsplit.db"
    DATABASE_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # --- Credentials ---
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    EMAIL_TOKEN_EXPIRE_MINUTES: int = 15

    # --- Email verification ---
    REQUIRE_EMAIL_VERIFICATION: bool = False
    PUBLIC_BASE_URL: str = "http://localhost:3000"
    SMTP_HOST: str = ""  # empty: verification links are only logged
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_SENDER: str = "no-reply@roomsplit.local"

    # --- HTTP ---
    CORS_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = False  # only together with explicit origins
    LOG_LEVEL: str = "INFO"


settings = Settings()
