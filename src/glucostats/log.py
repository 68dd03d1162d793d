"""Utilidades de logging para glucostats.

Library modules only call ``get_logger(__name__)``. Entry points (the CLI)
call ``configure_logging()`` once; it attaches a stderr handler to the
``glucostats`` logger and never touches the root logger.
"""

from __future__ import annotations

import logging
import os
import sys

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "GLUCOSTATS_LOG_LEVEL"


def configure_logging(
    level: str | int | None = None,
    *,
    fmt: str | None = None,
    datefmt: str | None = None,
    force: bool = False,
) -> None:
    """Configure the ``glucostats`` logger.

    Args:
        level: Logging level name or number. Defaults to the
            ``GLUCOSTATS_LOG_LEVEL`` env var, or ``WARNING``.
        fmt: Log message format.
        datefmt: Date format.
        force: Replace existing handlers instead of keeping the first one.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("glucostats")
    logger.setLevel(level)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                h.setLevel(level)
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(
        logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)
    )
    logger.addHandler(console)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``logging.getLogger(name)``, or the package logger if None."""
    return logging.getLogger(name or "glucostats")
