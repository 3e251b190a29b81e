from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    DB_BACKEND: str = "sqlite"
    SQLITE_PATH: str = "./data/ict_observatory.db"
    CORS_ORIGINS: str = ""  # Comma-separated origins, empty = same-origin only
    LOG_LEVEL: str = "INFO"

    TOP_SCHOOLS_LIMIT: int = 5
    SCHOOLS_PAGE_SIZE: int = 25

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
