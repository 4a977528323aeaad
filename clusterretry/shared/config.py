"""Centralized runtime configuration helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import cached_property
from pathlib import Path

from clusterretry.infra.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryConfig:
    """Default retry policy handed to clusters and sessions built locally."""

    max_read_retries: int
    read_retry_interval_seconds: float
    retry_writes: bool

    def __post_init__(self) -> None:
        if self.max_read_retries < 0:
            raise ValueError(f"max_read_retries must be >= 0, got {self.max_read_retries}")
        if self.read_retry_interval_seconds < 0:
            raise ValueError(
                f"read_retry_interval_seconds must be >= 0, got {self.read_retry_interval_seconds}"
            )

    @cached_property
    def read_retry_interval(self) -> timedelta:
        """Backoff between sharded read retries as a :class:`timedelta`."""

        return timedelta(seconds=self.read_retry_interval_seconds)


@dataclass(frozen=True)
class LoggingConfig:
    """Expose logging related configuration."""

    directory: str
    filename: str
    level: str

    @cached_property
    def directory_path(self) -> Path:
        return Path(self.directory)

    @cached_property
    def file_path(self) -> Path:
        return self.directory_path / self.filename


retry_config = RetryConfig(
    max_read_retries=settings.MAX_READ_RETRIES,
    read_retry_interval_seconds=settings.READ_RETRY_INTERVAL,
    retry_writes=settings.RETRY_WRITES,
)

if not retry_config.retry_writes:
    logger.info("Retryable writes disabled; writes will use the legacy retry path")


RETRY_CONFIG = retry_config
MAX_READ_RETRIES: int = retry_config.max_read_retries
READ_RETRY_INTERVAL: float = retry_config.read_retry_interval_seconds
RETRY_WRITES: bool = retry_config.retry_writes


logging_config = LoggingConfig(
    directory=settings.LOG_DIR,
    filename=settings.LOG_FILENAME,
    level=settings.LOG_LEVEL,
)


LOGGING_CONFIG = logging_config
LOG_DIRECTORY: str = logging_config.directory
LOG_DIRECTORY_PATH: Path = logging_config.directory_path
LOG_FILE_NAME: str = logging_config.filename
LOG_FILE_PATH: Path = logging_config.file_path
LOG_LEVEL: str = logging_config.level
