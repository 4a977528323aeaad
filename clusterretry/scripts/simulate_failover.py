from __future__ import annotations

import argparse
import logging
from typing import Callable, Sequence

from clusterretry.adapters.stubs import ClusterStub, SessionStub
from clusterretry.domain.codes import SHUTDOWN_CODES
from clusterretry.domain.errors import ClusterRetryError, OperationFailure, SocketError
from clusterretry.domain.schemas import WriteConcern
from clusterretry.infra.logging import setup_logging
from clusterretry.services.retryable import Retryable

logger = logging.getLogger(__name__)

FAILURES: dict[str, Callable[[], Exception]] = {
    "socket": lambda: SocketError("connection reset by peer"),
    "not-master": lambda: OperationFailure("not master"),
    "shutdown": lambda: OperationFailure(
        "message missing", code=91, code_name=SHUTDOWN_CODES[91]
    ),
    "unauthorized": lambda: OperationFailure("not authorized", code=13, code_name="Unauthorized"),
}


def build_parser() -> argparse.ArgumentParser:
    """Return an argument parser for the helper script."""

    parser = argparse.ArgumentParser(
        description=(
            "Runs a fake operation that fails a fixed number of times against an "
            "in-memory cluster, showing how the retry core reacts."
        )
    )
    parser.add_argument("kind", choices=("read", "write"))
    parser.add_argument("--failure", choices=sorted(FAILURES), default="not-master")
    parser.add_argument("--failures", type=int, default=1, help="Attempts that fail before success.")
    parser.add_argument("--sharded", action="store_true")
    parser.add_argument("--max-read-retries", type=int, default=None)
    parser.add_argument("--interval", type=float, default=0.0, help="Read retry interval (seconds).")
    parser.add_argument("--session", action="store_true", help="Bind writes to a retryable session.")
    parser.add_argument("--unacknowledged", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    return parser


def failing_operation(failure: Callable[[], Exception], failures: int) -> Callable[[], str]:
    """Return an operation raising ``failure()`` for its first ``failures`` calls."""

    attempts = {"count": 0}

    def _operation() -> str:
        attempts["count"] += 1
        if attempts["count"] <= failures:
            raise failure()
        return f"ok after {attempts['count']} attempt(s)"

    return _operation


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point used by ``python -m clusterretry.scripts.simulate_failover``."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.failures < 0:
        parser.error("--failures must be >= 0")
        return 2

    setup_logging(args.log_level, to_file=False)

    cluster = ClusterStub(
        sharded=args.sharded,
        max_read_retries=args.max_read_retries,
        read_retry_interval=args.interval,
    )
    retryable = Retryable(cluster)
    operation = failing_operation(FAILURES[args.failure], args.failures)

    try:
        if args.kind == "read":
            result = retryable.read_with_retry(operation)
        else:
            session = SessionStub() if args.session else None
            write_concern = WriteConcern.unacknowledged() if args.unacknowledged else None
            result = retryable.write_with_retry(operation, session, write_concern)
    except ClusterRetryError as exc:
        logger.error("Operation failed: %s (%s)", exc, type(exc).__name__)
        print(f"calls: {', '.join(cluster.calls) or '-'}")
        return 1

    print(result)
    print(f"calls: {', '.join(cluster.calls) or '-'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
