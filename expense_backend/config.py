# expense_backend/config.py
# Environment-driven settings for the expense backend

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from EXPENSE_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_",
        env_file=".env",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        "sqlite:///./database.db",
        description="SQLAlchemy database URL",
    )
    sql_echo: bool = Field(False, description="Log every SQL statement")
    pool_pre_ping: bool = Field(True, description="Check pooled connections before use")

    # HTTP
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Security
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # Bootstrap
    seed_sample_expenses: bool = True

    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
