"""Client configuration loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Runtime configuration used across the project."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CLUSTERRETRY_", extra="ignore")
    MAX_READ_RETRIES: int = Field(default=1, ge=0)
    READ_RETRY_INTERVAL: float = Field(default=5.0, ge=0)  # seconds
    RETRY_WRITES: bool = True
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "clusterretry.log"

settings = Settings()
