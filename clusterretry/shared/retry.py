"""Retry helpers shared across the executors."""

from __future__ import annotations

import time
from typing import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_none,
)

Sleeper = Callable[[float], None]


def skip_zero_sleep(sleeper: Sleeper = time.sleep) -> Sleeper:
    """Wrap ``sleeper`` so immediate retries never reach it."""

    def _sleep(seconds: float) -> None:
        if seconds > 0:
            sleeper(seconds)

    return _sleep


def failure_of(retry_state: RetryCallState) -> BaseException:
    """Return the exception raised by the attempt that just finished."""

    outcome = retry_state.outcome
    if outcome is None or not outcome.failed:
        raise RuntimeError("retry hook called without a failed attempt")
    exc = outcome.exception()
    assert exc is not None
    return exc


def retry_once(
    should_retry: Callable[[BaseException], bool],
    before_retry: Callable[[RetryCallState], None],
) -> Retrying:
    """Build a controller allowing at most one immediate re-execution.

    ``before_retry`` runs between the two attempts. Whatever the second
    attempt raises is re-raised unchanged.
    """

    return Retrying(
        retry=retry_if_exception(should_retry),
        stop=stop_after_attempt(2),
        wait=wait_none(),
        before_sleep=before_retry,
        sleep=skip_zero_sleep(),
        reraise=True,
    )
