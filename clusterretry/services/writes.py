"""Write retry executors and the gate choosing between them.

Two protocols exist. The legacy path retries once, and only when the server
itself reported a failover, because without a session nothing stops a
retried write from being applied twice. The modern path tags the write with
the session's transaction number so the server can collapse duplicates,
which makes network failures safe to retry as well. Both retry at most once.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from tenacity import RetryCallState

from clusterretry.adapters.base import Cluster, Session, SupportsAcknowledged
from clusterretry.domain.enums import Disposition, WritePath
from clusterretry.services.classifier import DEFAULT_CLASSIFIER, ErrorClassifier
from clusterretry.shared.retry import failure_of, retry_once

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LEGACY_RETRYABLE = frozenset({Disposition.RETRYABLE_OPERATION_FAILURE})
_MODERN_RETRYABLE = frozenset(
    {Disposition.RETRYABLE_OPERATION_FAILURE, Disposition.NETWORK_FAILURE}
)


def retry_write_allowed(
    session: Optional[Session],
    write_concern: Optional[SupportsAcknowledged],
) -> bool:
    """Return ``True`` when the write may use the session-based retry protocol."""

    if session is None:
        return False
    if not session.retry_writes():
        return False
    if session.in_transaction():
        return False
    return write_concern is None or write_concern.acknowledged


def select_write_path(
    session: Optional[Session],
    write_concern: Optional[SupportsAcknowledged],
) -> WritePath:
    if retry_write_allowed(session, write_concern):
        return WritePath.MODERN
    return WritePath.LEGACY


def _rescan_before_retry(cluster: Cluster, path: WritePath) -> Callable[[RetryCallState], None]:
    def _before(retry_state: RetryCallState) -> None:
        logger.warning("Retrying %s write after: %s", path.value, failure_of(retry_state))
        cluster.scan()

    return _before


def legacy_write_with_retry(
    cluster: Cluster,
    operation: Callable[[], T],
    *,
    classifier: ErrorClassifier = DEFAULT_CLASSIFIER,
) -> T:
    """Execute a write without a retryable-writes session.

    Retried once after a topology scan if the server reports a retryable
    failure. Network failures propagate immediately.
    """

    retrying = retry_once(
        lambda exc: classifier.classify(exc) in _LEGACY_RETRYABLE,
        _rescan_before_retry(cluster, WritePath.LEGACY),
    )
    return retrying(operation)


def modern_write_with_retry(
    cluster: Cluster,
    session: Session,
    operation: Callable[[], T],
    *,
    classifier: ErrorClassifier = DEFAULT_CLASSIFIER,
) -> T:
    """Execute a write bound to a retryable-writes session.

    The transaction number is advanced once per logical write, before the
    first attempt, so a retry carries the same number as the first attempt.
    """

    txn_num = session.next_txn_num()
    logger.debug("Executing retryable write with txn number %d", txn_num)

    retrying = retry_once(
        lambda exc: classifier.classify(exc) in _MODERN_RETRYABLE,
        _rescan_before_retry(cluster, WritePath.MODERN),
    )
    return retrying(operation)


def write_with_retry(
    cluster: Cluster,
    operation: Callable[[], T],
    session: Optional[Session] = None,
    write_concern: Optional[SupportsAcknowledged] = None,
    *,
    classifier: ErrorClassifier = DEFAULT_CLASSIFIER,
) -> T:
    path = select_write_path(session, write_concern)
    logger.debug("Write retry path selected: %s", path.value)
    if path is WritePath.MODERN:
        assert session is not None
        return modern_write_with_retry(cluster, session, operation, classifier=classifier)
    return legacy_write_with_retry(cluster, operation, classifier=classifier)
