"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. DATABASE_URL is only checked when the durable store
is first used, so importing this module never fails.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog.core.constants import DEFAULT_RECORD_TTL


class Settings(BaseSettings):
    """Catalog settings loaded from environment and .env."""

    # App
    app_name: str = "catalog"
    app_version: str = "1.0.0"
    debug: bool = False

    # Durable store (SQLAlchemy async URL, e.g. postgresql+asyncpg://...)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Redis cache
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: float = 5.0
    cache_ttl_records: int = DEFAULT_RECORD_TTL

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_ttl(self) -> "Settings":
        """Reject a non-positive cache TTL (entries must always expire)."""
        if self.cache_ttl_records <= 0:
            raise ValueError(
                f"CACHE_TTL_RECORDS must be a positive number of seconds, got {self.cache_ttl_records}"
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError(
                f"TELEMETRY_SAMPLE_RATE must be between 0.0 and 1.0, got {self.telemetry_sample_rate}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
