# storefront/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required in production (.env):
      - DATABASE_URL (Postgres connection string)
      - JWT_SECRET (signing secret shared with the identity provider)

    Optional:
      - DATABASE_SSLMODE (appended to non-SQLite URLs, e.g. "require")
      - CHECKOUT_MAX_ATTEMPTS / CHECKOUT_RETRY_WAIT_SECONDS
        (bounded retries for transient store failures during checkout)
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = ""

    # Database
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DATABASE_SSLMODE: str | None = None
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # JWT verification (identity is resolved upstream, we only verify)
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"

    # Checkout unit of work
    CHECKOUT_MAX_ATTEMPTS: int = 3
    CHECKOUT_RETRY_WAIT_SECONDS: float = 0.1

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
