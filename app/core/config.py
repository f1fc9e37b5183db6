# app/core/config.py

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./shop.db"
    CREATE_TABLES_ON_STARTUP: bool = True

    # Reporting windows (today / week / month / year) are cut in this zone
    SHOP_TIMEZONE: str = "UTC"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    SALE_RATE_LIMIT: str = "30/minute"

    # Frontend
    CORS_ORIGINS: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_postgres_scheme(cls, value: str) -> str:
        # SQLAlchemy only understands postgresql://
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql://", 1)
        return value


settings = Settings()
