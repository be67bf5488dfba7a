"""
Settings for the Cash Flow API, read with pydantic-settings.

Values come from the environment first, then a local .env file, then the
defaults below. SECRET_KEY has no default, so a deployment that forgot it
fails at import time instead of signing tokens with a guessable key.

    from app.config import settings
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    APP_NAME: str = "Cash Flow API"
    APP_VERSION: str = "0.1.0"
    # Also switches logs from JSON lines to the console renderer
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Any async SQLAlchemy URL; the SQLite file's directory is created on startup
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/cashflow.db"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Report presentation
    CURRENCY_SYMBOL: str = "$"
    DESCRIPTION_MAX_LENGTH: int = 30
    TOP_CATEGORIES_LIMIT: int = 10
    # None lists every transaction of the period
    MONTHLY_DETAIL_LIMIT: int | None = None
    ANNUAL_DETAIL_LIMIT: int | None = 20

    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]

    @field_validator("DATABASE_URL")
    @classmethod
    def database_url_must_be_set(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("DATABASE_URL must not be empty")
        return value


settings = Settings()
