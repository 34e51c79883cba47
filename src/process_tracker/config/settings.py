"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def method_name(self) -> str:
        """Name of the bound logger method emitting at this level."""
        return self.value.lower()


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class TrackerSettings(BaseSettings):
    """Default log levels and span source used by tracked processes."""

    model_config = SettingsConfigDict(env_prefix="TRACKER_")

    start_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Level of the 'Starting process' log line",
    )
    success_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Level of the 'Completed in' log line",
    )
    failure_level: LogLevel = Field(
        default=LogLevel.ERROR,
        description="Level of the 'Failed after' log line",
    )
    source_name: str = Field(
        default="process_tracker",
        description="Instrumentation name of the default span source",
    )


class ObservabilitySettings(BaseSettings):
    """Tracing configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    tracing_enabled: bool = Field(default=True, description="Enable OpenTelemetry tracing")
    service_name: str = Field(
        default="process-tracker",
        alias="OTEL_SERVICE_NAME",
        description="service.name resource attribute of emitted spans",
    )


class Settings(BaseSettings):
    """Main library settings.

    All settings can be overridden via environment variables.
    For nested settings, use the appropriate prefix (e.g., TRACKER_START_LEVEL).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="process-tracker", description="Application name")

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Nested settings
    tracker: TrackerSettings = Field(default_factory=TrackerSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()
