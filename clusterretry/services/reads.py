"""Bounded retry loop for read operations."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

from tenacity import RetryCallState, Retrying, stop_never

from clusterretry.adapters.base import Cluster, Session, interval_seconds
from clusterretry.domain.enums import Disposition
from clusterretry.services.classifier import DEFAULT_CLASSIFIER, ErrorClassifier
from clusterretry.shared.retry import Sleeper, failure_of, skip_zero_sleep

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _ReadRetryPolicy:
    """Per-call decisions of the read loop.

    The cluster is queried afresh on every failure. The retry limit captured
    at the first failure acts as a ceiling, so a later increase reported by
    the cluster never extends the sequence.
    """

    def __init__(
        self,
        cluster: Cluster,
        session: Optional[Session],
        classifier: ErrorClassifier,
    ) -> None:
        self._cluster = cluster
        self._session = session
        self._classifier = classifier
        self._ceiling: Optional[int] = None
        self._limit = 0
        self._disposition: Optional[Disposition] = None

    def should_retry(self, retry_state: RetryCallState) -> bool:
        outcome = retry_state.outcome
        if outcome is None or not outcome.failed:
            return False

        disposition = self._classifier.classify(failure_of(retry_state))
        self._disposition = disposition

        if disposition.is_operation_failure:
            # Outside a shard router the same error is a failover signal
            # handled by the connection layer.
            if not self._cluster.is_sharded():
                return False
            if disposition is not Disposition.RETRYABLE_OPERATION_FAILURE:
                return False
        elif disposition is not Disposition.NETWORK_FAILURE:
            return False

        if self._session is not None and self._session.in_transaction():
            return False
        return self._within_budget(retry_state.attempt_number)

    def _within_budget(self, attempts: int) -> bool:
        reported = self._cluster.max_read_retries()
        if self._ceiling is None:
            self._ceiling = reported
        self._limit = min(self._ceiling, reported)
        return attempts <= self._limit

    def wait(self, retry_state: RetryCallState) -> float:
        if self._disposition is Disposition.NETWORK_FAILURE:
            return 0.0
        return interval_seconds(self._cluster.read_retry_interval())

    def before_retry(self, retry_state: RetryCallState) -> None:
        error = failure_of(retry_state)
        logger.warning(
            "Retrying read (%d of %d) after %s: %s",
            retry_state.attempt_number,
            self._limit,
            self._disposition.value if self._disposition else "failure",
            error,
        )
        if self._disposition is Disposition.NETWORK_FAILURE:
            self._cluster.scan()


def read_with_retry(
    cluster: Cluster,
    operation: Callable[[], T],
    *,
    session: Optional[Session] = None,
    classifier: ErrorClassifier = DEFAULT_CLASSIFIER,
    sleep: Sleeper = time.sleep,
) -> T:
    """Execute a read, retrying on network errors and sharded failovers.

    Network failures are retried immediately after a topology scan.
    Retryable operation failures are retried only on a sharded cluster,
    after sleeping for the cluster's read retry interval. Both kinds share
    the ``max_read_retries`` budget. The last failure propagates unchanged
    once the budget is spent.
    """

    policy = _ReadRetryPolicy(cluster, session, classifier)
    retrying = Retrying(
        retry=policy.should_retry,
        stop=stop_never,
        wait=policy.wait,
        before_sleep=policy.before_retry,
        sleep=skip_zero_sleep(sleep),
        reraise=True,
    )
    return retrying(operation)
