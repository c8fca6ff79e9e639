"""
Configuration management for the polling controller.

This module defines the immutable backoff configuration handed to a
controller at construction, plus environment-driven settings built with
Pydantic Settings for applications that prefer to configure polling from
the environment.
"""

from datetime import timedelta
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_MIN_RETRY_DELAY_MS = 10_000
DEFAULT_MAX_RETRY_DELAY_MS = 160_001
DEFAULT_BACKOFF_MULTIPLIER = 2.0


class PollingConfig(BaseModel):
    """Backoff configuration for a polling controller."""

    model_config = ConfigDict(frozen=True)

    min_retry_delay: timedelta = Field(
        default=timedelta(milliseconds=DEFAULT_MIN_RETRY_DELAY_MS),
        description="Lower bound and initial backoff delay",
    )
    max_retry_delay: timedelta = Field(
        default=timedelta(milliseconds=DEFAULT_MAX_RETRY_DELAY_MS),
        description="Upper bound on any computed backoff delay",
    )
    backoff_multiplier: float = Field(
        default=DEFAULT_BACKOFF_MULTIPLIER,
        ge=1.0,
        description="Factor applied to the previous delay to compute the next",
    )

    @field_validator("min_retry_delay", "max_retry_delay")
    @classmethod
    def validate_non_negative(cls, v: timedelta) -> timedelta:
        """Reject negative delays."""
        if v < timedelta(0):
            raise ValueError(f"Retry delay must not be negative, got {v}")
        return v

    @model_validator(mode="after")
    def validate_delay_bounds(self) -> "PollingConfig":
        """Ensure the maximum delay is not below the minimum."""
        if self.max_retry_delay < self.min_retry_delay:
            raise ValueError(
                "max_retry_delay must be greater than or equal to min_retry_delay"
            )
        return self

    @classmethod
    def from_milliseconds(
        cls,
        min_retry_delay_ms: float,
        max_retry_delay_ms: float,
        backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER,
    ) -> "PollingConfig":
        """
        Build a configuration from millisecond values.

        Args:
            min_retry_delay_ms: Minimum retry delay in milliseconds
            max_retry_delay_ms: Maximum retry delay in milliseconds
            backoff_multiplier: Backoff growth factor

        Returns:
            Validated polling configuration
        """
        return cls(
            min_retry_delay=timedelta(milliseconds=min_retry_delay_ms),
            max_retry_delay=timedelta(milliseconds=max_retry_delay_ms),
            backoff_multiplier=backoff_multiplier,
        )


DEFAULT_CONFIG = PollingConfig()


class Settings(BaseSettings):
    """Environment-driven settings for applications embedding the controller."""

    model_config = SettingsConfigDict(
        env_prefix="POLLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backoff configuration
    min_retry_delay_ms: int = Field(
        default=DEFAULT_MIN_RETRY_DELAY_MS,
        description="Minimum retry delay in milliseconds",
    )
    max_retry_delay_ms: int = Field(
        default=DEFAULT_MAX_RETRY_DELAY_MS,
        description="Maximum retry delay in milliseconds",
    )
    backoff_multiplier: float = Field(
        default=DEFAULT_BACKOFF_MULTIPLIER, description="Backoff multiplier"
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        allowed_formats = {"json", "console"}
        if v.lower() not in allowed_formats:
            raise ValueError(f"Invalid log format: {v}")
        return v.lower()

    @property
    def polling_config(self) -> PollingConfig:
        """Get polling configuration."""
        try:
            return PollingConfig.from_milliseconds(
                self.min_retry_delay_ms,
                self.max_retry_delay_ms,
                self.backoff_multiplier,
            )
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid polling configuration",
                context={
                    "min_retry_delay_ms": self.min_retry_delay_ms,
                    "max_retry_delay_ms": self.max_retry_delay_ms,
                    "backoff_multiplier": self.backoff_multiplier,
                    "errors": e.errors(),
                },
            ) from e


# Global settings instance - initialized lazily to avoid import-time errors
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings_instance
    if _settings_instance is None:
        try:
            _settings_instance = Settings()
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid polling settings: {e}", context={"errors": e.errors()}
            ) from e
    return _settings_instance


def __getattr__(name: str) -> Any:
    """Allow module-level access to settings attributes."""
    if name == "settings":
        return get_settings()
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
