from __future__ import annotations

import logging
import logging.handlers
import sys

from clusterretry.shared.config import LOG_DIRECTORY_PATH, LOG_FILE_PATH, LOG_LEVEL


def setup_logging(level: str | None = None, *, to_file: bool = True) -> None:
    resolved_level = (level or LOG_LEVEL).upper()

    root = logging.getLogger()
    root.setLevel(resolved_level)

    # Console handler (compact format)
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(resolved_level)
    ch.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname).1s %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    ))

    # Drop previous handlers so repeated setup does not duplicate output
    root.handlers.clear()
    root.addHandler(ch)

    if to_file:
        LOG_DIRECTORY_PATH.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            str(LOG_FILE_PATH), maxBytes=10_000_000, backupCount=5, encoding="utf-8"
        )
        fh.setLevel(resolved_level)
        fh.setFormatter(logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s [%(filename)s:%(lineno)d]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root.addHandler(fh)
