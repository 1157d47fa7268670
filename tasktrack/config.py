"""
TASKTRACK - Settings
====================
Environment-driven settings (TASKTRACK_* variables, optional .env file).
Command-line flags take precedence over anything configured here.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TASKTRACK_",
        env_file=".env",
        extra="ignore",
    )

    # JSON file holding the full task list
    data_file: Path = Path("tasks.json")

    # Log sink; empty disables file logging
    log_file: Optional[Path] = Path("system.log")
    log_level: str = "INFO"

    # Default window for the "upcoming" report
    upcoming_days: int = Field(7, ge=0)

    @field_validator("log_file", mode="before")
    @classmethod
    def _blank_disables(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    return Settings()
