"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Port, database URL and observability endpoint come from the environment
    - get_settings() is cached (lru_cache) — single instance per process
    - worker_count is fixed for the process lifetime (read once at startup)

Design Decisions:
    - Synchronous psycopg driver: store calls run on the database worker pool
      threads, never on the event loop
    - database_pool_size defaults to worker_count so every worker can hold
      one connection at the same time
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str = (
        "postgresql+psycopg://dziennik:dziennik@db:5432/dziennik"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql:// but the engine needs postgresql+psycopg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+psycopg://", 1)
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+psycopg://", 1)
        return v

    database_pool_size: int = 12
    database_max_overflow: int = 0
    database_pool_timeout: float = 30.0

    # Database worker pool
    worker_count: int = 12
    worker_timeout_seconds: float | None = None

    # API
    cors_origins: list[str] = ["*"]
    cors_max_age: int = 3600

    # Observability
    observability_endpoint: str | None = None
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("worker_count")
    @classmethod
    def worker_count_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("worker_count must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
