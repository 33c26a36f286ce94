from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LARDER_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "larder"
    env: str = "dev"
    host: str = "0.0.0.0"  # nosec B104 - intentional for container deployments
    port: int = Field(default=5000, validation_alias="PORT")

    # Document store (required, no default)
    database_url: str = Field(validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="LARDER_DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="LARDER_DB_MAX_OVERFLOW")
    db_pool_recycle: int = Field(default=1800, validation_alias="LARDER_DB_POOL_RECYCLE")
    db_echo: bool = Field(default=False, validation_alias="LARDER_DB_ECHO")

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    cache_ttl: int = Field(default=3600, validation_alias="LARDER_CACHE_TTL")
    cache_timeout: float = Field(default=2.0, validation_alias="LARDER_CACHE_TIMEOUT")

    # JSON list, e.g. ["https://cook.example"]
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"], validation_alias="LARDER_CORS_ORIGINS"
    )

    # Observability
    enable_metrics: bool = Field(default=True, validation_alias="LARDER_ENABLE_METRICS")
    log_level: str = Field(default="INFO", validation_alias="LARDER_LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process.

    Raises pydantic.ValidationError when DATABASE_URL is missing.
    """
    return Settings()  # type: ignore[call-arg]
