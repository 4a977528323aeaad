"""In-memory cluster and session implementations used during development and tests."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, List, Optional

from clusterretry.shared.config import RETRY_CONFIG

from .base import Cluster, Interval, Session

logger = logging.getLogger(__name__)


class ClusterStub(Cluster):
    """Cluster whose retry policy is set in memory.

    Every call made by the retry core is appended to :attr:`calls`, which
    lets tests assert the exact sequence of collaborator interactions.
    ``on_scan`` runs on every scan and may raise to simulate a failing
    topology refresh.
    """

    def __init__(
        self,
        *,
        sharded: bool = False,
        max_read_retries: Optional[int] = None,
        read_retry_interval: Optional[Interval] = None,
        on_scan: Optional[Callable[[], None]] = None,
    ) -> None:
        self._lock = RLock()
        self.sharded = sharded
        self.retries = RETRY_CONFIG.max_read_retries if max_read_retries is None else max_read_retries
        self.interval = (
            RETRY_CONFIG.read_retry_interval_seconds
            if read_retry_interval is None
            else read_retry_interval
        )
        self._on_scan = on_scan
        self.calls: List[str] = []
        self.scans = 0

    def _record(self, name: str) -> None:
        with self._lock:
            self.calls.append(name)

    def max_read_retries(self) -> int:
        self._record("max_read_retries")
        return self.retries

    def read_retry_interval(self) -> Interval:
        self._record("read_retry_interval")
        return self.interval

    def is_sharded(self) -> bool:
        self._record("is_sharded")
        return self.sharded

    def scan(self) -> None:
        self._record("scan")
        with self._lock:
            self.scans += 1
        logger.debug("Topology scan #%d requested", self.scans)
        if self._on_scan is not None:
            self._on_scan()


class SessionStub(Session):
    """Session holding a transaction counter guarded by a lock."""

    def __init__(
        self,
        *,
        retry_writes: Optional[bool] = None,
        in_transaction: bool = False,
        txn_num: int = 0,
    ) -> None:
        self._lock = RLock()
        self._retry_writes = RETRY_CONFIG.retry_writes if retry_writes is None else retry_writes
        self._in_transaction = in_transaction
        self._txn_num = txn_num
        self.calls: List[str] = []

    @property
    def txn_num(self) -> int:
        """Identifier the transport attaches to the current write."""

        with self._lock:
            return self._txn_num

    def retry_writes(self) -> bool:
        self.calls.append("retry_writes")
        return self._retry_writes

    def in_transaction(self) -> bool:
        self.calls.append("in_transaction")
        return self._in_transaction

    def start_transaction(self) -> None:
        with self._lock:
            self._in_transaction = True

    def next_txn_num(self) -> int:
        self.calls.append("next_txn_num")
        with self._lock:
            self._txn_num += 1
            return self._txn_num
