# Configuration module
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gate settings loaded from READYGATE_* environment variables."""

    # Waiters
    default_timeout_ms: int = Field(
        default=2000,
        description="Deadline applied to ready() calls that don't pass one (0 disables)",
    )
    gate_name: str = Field(
        default="ReadinessGate", description="Component name used in timeout messages"
    )

    @field_validator("default_timeout_ms", mode="before")
    @classmethod
    def validate_default_timeout_ms(cls, v: Any) -> int:
        """Convert empty string to 0 and reject negative deadlines."""
        if v == "" or v is None:
            return 0
        value = int(v)
        if value < 0:
            raise ValueError("default_timeout_ms must be >= 0")
        return value

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Path | None = Field(
        default=None, description="Directory for rotating JSON log files (disabled if unset)"
    )
    log_json: bool = Field(default=False, description="Emit JSON on the console handler")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Normalize and check the logging level name."""
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_dir", mode="before")
    @classmethod
    def validate_log_dir(cls, v: Any) -> Path | None:
        """Convert empty string to None for log_dir."""
        if v == "" or v is None:
            return None
        return Path(v)

    model_config = SettingsConfigDict(
        env_prefix="READYGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
