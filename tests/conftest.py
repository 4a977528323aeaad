from __future__ import annotations

from typing import Any, Callable, List, Optional

import pytest

from clusterretry.adapters.stubs import ClusterStub, SessionStub


class ScriptedOperation:
    """Operation returning or raising the scripted outcomes in order.

    Each execution is appended to ``log`` as ``"execute"`` so the sequence
    can be compared with the collaborator calls recorded by the stubs.
    """

    def __init__(self, outcomes: List[Any], log: Optional[List[str]] = None) -> None:
        self._outcomes = list(outcomes)
        self.log = log if log is not None else []
        self.executions = 0

    def __call__(self) -> Any:
        self.executions += 1
        self.log.append("execute")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def cluster() -> ClusterStub:
    return ClusterStub(sharded=False, max_read_retries=1, read_retry_interval=0.1)


@pytest.fixture
def sharded_cluster() -> ClusterStub:
    return ClusterStub(sharded=True, max_read_retries=1, read_retry_interval=0.1)


@pytest.fixture
def retry_session() -> SessionStub:
    return SessionStub(retry_writes=True)


@pytest.fixture
def script() -> Callable[..., ScriptedOperation]:
    def _factory(*outcomes: Any, log: Optional[List[str]] = None) -> ScriptedOperation:
        return ScriptedOperation(list(outcomes), log=log)

    return _factory


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps: List[float]) -> Callable[[float], None]:
    return sleeps.append
