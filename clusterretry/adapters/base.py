"""Interfaces of the collaborators consulted by the retry executors."""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, Union, runtime_checkable

Interval = Union[float, int, timedelta]


@runtime_checkable
class Cluster(Protocol):
    """Client-side view of the server topology."""

    def max_read_retries(self) -> int:
        """Number of times a failed read may be retried."""

    def read_retry_interval(self) -> Interval:
        """Delay before retrying a read on a sharded topology."""

    def is_sharded(self) -> bool:
        """Whether the client talks to a shard router."""

    def scan(self) -> None:
        """Refresh the cached topology before the next attempt."""


@runtime_checkable
class Session(Protocol):
    """Logical session a write may be bound to."""

    def retry_writes(self) -> bool:
        """Whether retryable writes were negotiated for this session."""

    def in_transaction(self) -> bool:
        """Whether a multi-statement transaction is in progress."""

    def next_txn_num(self) -> int:
        """Advance and return the session's write-attempt identifier."""


class SupportsAcknowledged(Protocol):
    """Anything exposing whether a write concern is acknowledged."""

    @property
    def acknowledged(self) -> bool: ...


def interval_seconds(value: Interval) -> float:
    """Normalize a cluster-reported interval to seconds."""

    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    else:
        seconds = float(value)
    if seconds < 0:
        raise ValueError(f"read retry interval must be >= 0, got {value!r}")
    return seconds
