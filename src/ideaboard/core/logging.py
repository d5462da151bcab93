"""Logging setup shared by the API process and maintenance scripts."""

from __future__ import annotations

import logging

from ideaboard.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the root logger.

    Calling this more than once only adjusts the level.
    """
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    if not any(getattr(h, "_ideaboard", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ideaboard = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    if settings.sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
