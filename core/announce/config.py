"""Configuration settings for announce, loaded from environment variables."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AnnounceSettings(BaseSettings):
    """Settings read from ``ANNOUNCE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ANNOUNCE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    json_logs: bool = False
    include_timestamps: bool = True

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> AnnounceSettings:
    """Return the process-wide settings, read once."""
    return AnnounceSettings()
