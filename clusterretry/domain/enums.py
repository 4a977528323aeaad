from __future__ import annotations

from enum import Enum


class Disposition(str, Enum):
    """How the retry executors should treat a caught failure."""

    NETWORK_FAILURE = "network-failure"
    RETRYABLE_OPERATION_FAILURE = "retryable-operation-failure"
    NON_RETRYABLE_OPERATION_FAILURE = "non-retryable-operation-failure"
    NON_RETRYABLE_OTHER = "non-retryable-other"

    @property
    def is_operation_failure(self) -> bool:
        return self in (
            Disposition.RETRYABLE_OPERATION_FAILURE,
            Disposition.NON_RETRYABLE_OPERATION_FAILURE,
        )


class WritePath(str, Enum):
    """Write retry protocol chosen by the authorization gate."""

    LEGACY = "legacy"
    MODERN = "modern"
