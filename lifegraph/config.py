"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden from the environment or a .env file
    - get_settings() is cached (lru_cache) — single instance per process
    - Board rules (max size, iteration budget) default to 1000

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SQLite default so the service runs out-of-the-box; production sets a
      PostgreSQL DATABASE_URL
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from lifegraph.core.domain_types import MAX_BOARD_SIZE, StorageBackend
from lifegraph.core.final_state import DEFAULT_MAX_ITERATIONS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    storage_backend: StorageBackend = StorageBackend.SQL
    database_url: str = "sqlite+aiosqlite:///./lifegraph.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_schema: bool = True

    # Board rules
    max_board_size: int = Field(MAX_BOARD_SIZE, ge=1, le=MAX_BOARD_SIZE)
    final_state_max_iterations: int = Field(DEFAULT_MAX_ITERATIONS, ge=1)
    final_state_timeout_seconds: float = Field(30.0, gt=0)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
