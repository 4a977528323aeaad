import time
from typing import Callable, Optional, TypeVar

from clusterretry.adapters.base import Cluster, Session, SupportsAcknowledged
from clusterretry.services.classifier import DEFAULT_CLASSIFIER, ErrorClassifier
from clusterretry.services.reads import read_with_retry
from clusterretry.services.writes import retry_write_allowed, write_with_retry
from clusterretry.shared.retry import Sleeper

T = TypeVar("T")


class Retryable:
    """Retry entry points bound to the cluster a client holds for its lifetime."""

    def __init__(
        self,
        cluster: Cluster,
        *,
        classifier: ErrorClassifier = DEFAULT_CLASSIFIER,
        sleep: Sleeper = time.sleep,
    ):
        self.cluster = cluster
        self.classifier = classifier
        self._sleep = sleep

    def read_with_retry(
        self,
        operation: Callable[[], T],
        session: Optional[Session] = None,
    ) -> T:
        return read_with_retry(
            self.cluster,
            operation,
            session=session,
            classifier=self.classifier,
            sleep=self._sleep,
        )

    def write_with_retry(
        self,
        operation: Callable[[], T],
        session: Optional[Session] = None,
        write_concern: Optional[SupportsAcknowledged] = None,
    ) -> T:
        return write_with_retry(
            self.cluster,
            operation,
            session,
            write_concern,
            classifier=self.classifier,
        )

    @staticmethod
    def retry_write_allowed(
        session: Optional[Session],
        write_concern: Optional[SupportsAcknowledged],
    ) -> bool:
        return retry_write_allowed(session, write_concern)
