"""Application configuration using pydantic-settings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class AmbariSettings(BaseSettings):
    """Cluster management server connection."""

    host: str = Field(default="localhost", alias="AMBARI_HOST")
    port: int = Field(default=8080, alias="AMBARI_PORT")
    user: str = Field(default="admin", alias="AMBARI_USER")
    password: str = Field(default="admin", alias="AMBARI_PASSWORD")
    use_tls: bool = Field(default=False, alias="AMBARI_USE_TLS")
    verify_tls: bool = Field(default=True, alias="AMBARI_VERIFY_TLS")
    timeout: float = Field(default=30.0, alias="AMBARI_TIMEOUT")

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_tls else "http"
        return f"{scheme}://{self.host}:{self.port}/api/v1"

    model_config = {"env_prefix": "AMBARI_", "extra": "ignore", "populate_by_name": True}


class ConsoleSettings(BaseSettings):
    """Interactive console configuration."""

    prompt: str = Field(default="ambari-shell>", alias="CONSOLE_PROMPT")
    progress_interval: float = Field(default=1.0, alias="CONSOLE_PROGRESS_INTERVAL")
    progress_max_frames: int | None = Field(default=600, alias="CONSOLE_PROGRESS_MAX_FRAMES")
    simulate: bool = Field(default=False, alias="CONSOLE_SIMULATE")

    model_config = {"env_prefix": "CONSOLE_", "extra": "ignore", "populate_by_name": True}


class ApiSettings(BaseSettings):
    """HTTP session API configuration."""

    host: str = Field(default="127.0.0.1", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")
    prefix: str = Field(default="/api/v1", alias="API_PREFIX")

    model_config = {"env_prefix": "API_", "extra": "ignore", "populate_by_name": True}


class ObservabilitySettings(BaseSettings):
    """Observability configuration."""

    service_name: str = Field(default="cluster-console", alias="SERVICE_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(default=False, alias="JSON_LOGS")
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")
    tracing_enabled: bool = Field(default=False, alias="TRACING_ENABLED")

    model_config = {"env_prefix": "OBS_", "extra": "ignore", "populate_by_name": True}


class Settings(BaseSettings):
    """Main application settings."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    ambari: AmbariSettings = Field(default_factory=AmbariSettings)
    console: ConsoleSettings = Field(default_factory=ConsoleSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
