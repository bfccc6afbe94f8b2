"""
OLAP Dashboard
Centralized Configuration Management

Pydantic settings with environment variable support for the mock data
provider and the logging stack.
"""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmptyFilterPolicy(str, Enum):
    """What the provider returns when request filters match no generated row"""
    FALLBACK_TO_UNFILTERED = "fallback_to_unfiltered"
    RETURN_EMPTY = "return_empty"


class ProviderSettings(BaseSettings):
    """Mock Data Provider Configuration"""

    model_config = SettingsConfigDict(env_prefix="PROVIDER_")

    latency_seconds: float = Field(default=0.8, ge=0, description="Simulated backend latency")
    rows_per_column: int = Field(default=3, ge=1, description="Generated rows per dimension column")
    min_rows: int = Field(default=5, ge=1, description="Minimum generated rows")
    max_rows: int = Field(default=20, ge=1, description="Maximum generated rows")
    random_seed: Optional[int] = Field(default=None, description="Seed for value columns (None = nondeterministic)")
    empty_filter_policy: EmptyFilterPolicy = Field(
        default=EmptyFilterPolicy.FALLBACK_TO_UNFILTERED,
        description="Result when request filters exclude every row",
    )

    @model_validator(mode="after")
    def validate_row_bounds(self) -> "ProviderSettings":
        """Ensure the row clamp is well formed"""
        if self.min_rows > self.max_rows:
            raise ValueError("min_rows must not exceed max_rows")
        return self


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="olap-dashboard", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # Subsystem configurations
    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
