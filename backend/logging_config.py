"""Logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging
import sys


def configure_logging(log_level: str = "INFO") -> None:
    """Configure the root logger with a human-readable stderr handler.

    ``basicConfig`` is a no-op when the root logger already has handlers
    (uvicorn, pytest), so only the level is applied in that case.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)

    # httpx logs every request at INFO.
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
