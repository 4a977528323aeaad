"""Failure taxonomy raised by operations and consumed by the retry executors."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .codes import describe_code


class ClusterRetryError(Exception):
    """Base class for every failure the driver core knows how to classify."""


class NetworkError(ClusterRetryError):
    """Transport-level failure: the connection was lost or timed out."""


class SocketError(NetworkError):
    """Raised when a socket operation fails."""


class SocketTimeoutError(NetworkError):
    """Raised when a socket operation times out."""


class OperationFailure(ClusterRetryError):
    """Structured error reported by the server for a single operation.

    ``code`` and ``code_name`` are optional because legacy servers only
    report a message. ``result`` keeps the raw server reply when available.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        result: Optional[Mapping[str, Any]] = None,
        *,
        code: Optional[int] = None,
        code_name: Optional[str] = None,
    ) -> None:
        super().__init__(message or "")
        self.message = message or ""
        self.result = result
        self.code = code
        self.code_name = code_name

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        label = f"{self.code_name} ({self.code})" if self.code_name else describe_code(self.code)
        return f"[{label}]: {self.message}" if self.message else f"[{label}]"


class UnsupportedFeature(ClusterRetryError):
    """Client-side incompatibility detected before reaching the server."""


class UnsupportedCollation(UnsupportedFeature):
    """Collation was requested against a server that does not support it."""


class UnsupportedArrayFilters(UnsupportedFeature):
    """Array filters were requested against a server that does not support them."""


class ConfigurationError(ClusterRetryError):
    """Invalid client-side configuration, e.g. a contradictory write concern."""
