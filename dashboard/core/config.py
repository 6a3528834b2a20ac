"""Configuration management for the Transaction Dashboard service.

Configuration is loaded from environment variables, one settings section
per concern.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _split_csv(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [item.strip().upper() for item in value.split(",") if item.strip()]
    return [item.strip().upper() for item in value]


class AppConfig(BaseSettings):
    name: str = Field(default="transaction-dashboard")
    env: AppEnvironment = Field(default=AppEnvironment.LOCAL)
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: LogLevel = Field(default=LogLevel.INFO)
    api_prefix: str = Field(default="/api/v1")

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("env", mode="before")
    @classmethod
    def validate_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        if isinstance(v, AppEnvironment):
            return v
        return AppEnvironment(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v.upper())


class ServerConfig(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    workers: int = Field(default=4)

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class BackendConfig(BaseSettings):
    """Location of the transaction-processing microservice."""

    transactions_base_url: str = Field(default="http://localhost:8080/api/v1/transacciones")
    history_base_url: str = Field(default="http://localhost:8080/api/v1/historial")
    timeout_seconds: float = Field(default=10.0, gt=0)
    fraud_lookback_days: int = Field(default=30, ge=1)
    default_range_days: int = Field(default=7, ge=1)

    model_config = SettingsConfigDict(env_prefix="BACKEND_")

    @field_validator("transactions_base_url", "history_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class StatusConfig(BaseSettings):
    """Status families used for counting.

    Values are canonical status names. The taxonomy is owned by the backend
    team, so it stays overridable per deployment.
    """

    completed_codes: str = Field(default="COMPLETED")
    pending_codes: str = Field(default="PENDING")
    failed_codes: str = Field(default="ERROR,REJECTED,FRAUD")

    model_config = SettingsConfigDict(env_prefix="STATUS_")

    @property
    def completed(self) -> list[str]:
        return _split_csv(self.completed_codes)

    @property
    def pending(self) -> list[str]:
        return _split_csv(self.pending_codes)

    @property
    def failed(self) -> list[str]:
        return _split_csv(self.failed_codes)


class NormalizationConfig(BaseSettings):
    max_search_depth: int = Field(default=8, ge=1)

    model_config = SettingsConfigDict(env_prefix="NORMALIZATION_")


class FilterStoreConfig(BaseSettings):
    # Empty path keeps the last filter in memory only
    path: str = Field(default="")

    model_config = SettingsConfigDict(env_prefix="FILTERS_")


class ObservabilityConfig(BaseSettings):
    service_name: str = Field(default="transaction-dashboard")
    otlp_endpoint: str | None = Field(default=None)
    otlp_insecure: bool = Field(default=True)
    log_record_format: str = Field(default="json")

    model_config = SettingsConfigDict(env_prefix="OTEL_")


class SecurityConfig(BaseSettings):
    cors_allowed_origins: str = Field(default="http://localhost:3000,http://localhost:8000")
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: list[str] = Field(default=["GET", "PUT"])
    cors_allow_headers: list[str] = Field(default=["Content-Type", "X-Request-ID"])

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    @field_validator("cors_allowed_origins", mode="after")
    @classmethod
    def validate_cors_allowed_origins(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list of origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    status: StatusConfig = Field(default_factory=StatusConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    filters: FilterStoreConfig = Field(default_factory=FilterStoreConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    get_settings.cache_clear()
    return get_settings()
