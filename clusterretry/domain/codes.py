from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

# "Node is shutting down" codes.
SHUTDOWN_CODES: Dict[int, str] = {
    91: "ShutdownInProgress",
    11600: "InterruptedAtShutdown",
}

# "Not master" and "node is recovering" codes, of which the shutdown codes
# are a subset.
NOT_MASTER_CODES: Dict[int, str] = {
    10058: "LegacyNotPrimary",
    10107: "NotMaster",
    13435: "NotMasterNoSlaveOk",
    11602: "InterruptedDueToReplStateChange",
    13436: "NotMasterOrSecondary",
    189: "PrimarySteppedDown",
    **SHUTDOWN_CODES,
}

RETRYABLE_CODE_NAMES: Dict[int, str] = {
    **NOT_MASTER_CODES,
    6: "HostUnreachable",
    7: "HostNotFound",
    89: "NetworkTimeout",
    9001: "SocketException",
    262: "ExceededTimeLimit",
    134: "ReadConcernMajorityNotAvailableYet",
}

RETRYABLE_CODES: FrozenSet[int] = frozenset(RETRYABLE_CODE_NAMES)

# Substrings of server messages signalling a topology change. Matched
# case-insensitively against the failure message.
RETRYABLE_MESSAGES: Tuple[str, ...] = (
    "not master",
    "node is recovering",
    "no master",
    "not primary",
    "could not contact primary",
    "interrupted at shutdown",
    "transport error",
    "socket exception",
    "connect failed",
    "connection attempt failed",
    "error querying",
    "unknown replica set",
)


def describe_code(code: int | None) -> str:
    """Return a readable label for ``code`` such as ``ShutdownInProgress (91)``."""

    if code is None:
        return "no code"
    name = RETRYABLE_CODE_NAMES.get(code)
    return f"{name} ({code})" if name else str(code)
