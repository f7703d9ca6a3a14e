"""Logging setup for comparison runs."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LIBRARY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore", "sqlalchemy.engine")


def configure_logging(
    *,
    level: int | str = logging.INFO,
    force: bool = False,
    quiet_libraries: bool = True,
) -> None:
    """Configure the root logger with the batch log format.

    With ``quiet_libraries`` the HTTP and SQL client loggers are held at
    WARNING so per-request lines stay out of per-batch output. Pass
    ``force=True`` to reconfigure an already configured root logger.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    if quiet_libraries:
        for name in LIBRARY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
