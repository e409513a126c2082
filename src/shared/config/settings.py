"""Application settings and configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database-specific settings."""

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "good_corner"
    postgres_user: str = "good_corner"
    postgres_password: SecretStr = SecretStr("good_corner_password")

    # Full SQLAlchemy async URL, overrides the postgres_* components when set
    database_dsn: str | None = None

    # Connection pool settings
    db_pool_size: int = Field(default=10, ge=1)
    db_pool_max_overflow: int = Field(default=10, ge=0)
    db_pool_timeout: float = Field(default=30.0)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )

    @property
    def async_database_url(self) -> str:
        """Get the async database URL used by the SQLAlchemy engine."""
        if self.database_dsn:
            return self.database_dsn
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


class CacheSettings(BaseSettings):
    """Search cache settings."""

    cache_backend: Literal["redis", "memory", "none"] = "redis"

    redis_host: str = Field(default="localhost")
    redis_port: int = Field(default=6379)
    redis_db: int = Field(default=0)
    redis_password: SecretStr | None = None
    redis_socket_timeout: float = Field(default=1.0, gt=0)

    search_cache_ttl_seconds: int = Field(default=600, ge=1)
    memory_cache_max_size: int = Field(default=1000, ge=1)

    # Circuit breaker around the cache backend
    cache_failure_threshold: int = Field(default=5, ge=1)
    cache_recovery_timeout: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )

    @property
    def redis_url(self) -> str:
        """Construct the Redis URL from components."""
        auth = ""
        if self.redis_password is not None:
            auth = f":{self.redis_password.get_secret_value()}@"
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"


class SearchSettings(BaseSettings):
    """Ad search and listing settings."""

    search_order: Literal["store", "newest_first", "oldest_first"] = "store"
    search_result_limit: int | None = Field(default=None, ge=1)
    ad_list_limit: int = Field(default=20, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


class APISettings(BaseSettings):
    """API-specific settings."""

    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=4000)
    api_reload: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


class MonitoringSettings(BaseSettings):
    """Monitoring and observability settings."""

    otel_exporter_otlp_endpoint: str | None = None
    otel_service_name: str = "good-corner"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


class Settings(BaseSettings):
    """Main application settings."""

    # Application metadata
    app_name: str = "The Good Corner"
    app_version: str = "1.0.0"
    environment: str = "development"

    # Sub-settings
    database: DatabaseSettings = DatabaseSettings()
    cache: CacheSettings = CacheSettings()
    search: SearchSettings = SearchSettings()
    api: APISettings = APISettings()
    monitoring: MonitoringSettings = MonitoringSettings()

    # Feature flags
    debug_mode: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance with all configuration loaded.
    """
    return Settings()


# Global settings instance for convenience
settings = get_settings()
