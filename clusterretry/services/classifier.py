"""Map caught failures to retry dispositions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Tuple, Type

from clusterretry.domain.codes import RETRYABLE_CODES, RETRYABLE_MESSAGES
from clusterretry.domain.enums import Disposition
from clusterretry.domain.errors import NetworkError, OperationFailure


@dataclass(frozen=True)
class ErrorClassifier:
    """Matching table deciding which failures signal a topology change.

    Instances are immutable so classifying the same error always yields the
    same disposition. Use :meth:`extend` to derive a classifier that
    recognizes additional messages, codes or network error types.
    """

    network_errors: Tuple[Type[BaseException], ...] = (NetworkError,)
    retryable_messages: Tuple[str, ...] = RETRYABLE_MESSAGES
    retryable_codes: FrozenSet[int] = field(default=RETRYABLE_CODES)

    def __post_init__(self) -> None:
        # Normalized once; matching is case-insensitive.
        object.__setattr__(
            self,
            "retryable_messages",
            tuple(m.casefold() for m in self.retryable_messages),
        )

    def classify(self, error: BaseException) -> Disposition:
        if isinstance(error, self.network_errors):
            return Disposition.NETWORK_FAILURE
        if isinstance(error, OperationFailure):
            if self.is_retryable_failure(error):
                return Disposition.RETRYABLE_OPERATION_FAILURE
            return Disposition.NON_RETRYABLE_OPERATION_FAILURE
        return Disposition.NON_RETRYABLE_OTHER

    def is_retryable_failure(self, failure: OperationFailure) -> bool:
        if failure.code is not None and failure.code in self.retryable_codes:
            return True
        message = failure.message.casefold()
        return any(pattern in message for pattern in self.retryable_messages)

    def extend(
        self,
        *,
        messages: Iterable[str] = (),
        codes: Iterable[int] = (),
        network_errors: Iterable[Type[BaseException]] = (),
    ) -> "ErrorClassifier":
        return replace(
            self,
            network_errors=self.network_errors + tuple(network_errors),
            retryable_messages=self.retryable_messages + tuple(messages),
            retryable_codes=self.retryable_codes | frozenset(codes),
        )


DEFAULT_CLASSIFIER = ErrorClassifier()


def classify(error: BaseException) -> Disposition:
    """Classify ``error`` with the default matching table."""

    return DEFAULT_CLASSIFIER.classify(error)
