"""Engine and per-request sessions."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from ideaboard.core.settings import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for posts, comments, reactions and accounts."""


# Models register themselves on Base.metadata when imported.
import ideaboard.models  # noqa: E402,F401


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Turn on FK enforcement (and ON DELETE CASCADE) for every SQLite connection."""

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, *, echo: bool = False, **kwargs: Any) -> Engine:
    """Create an engine; SQLite URLs get thread sharing and foreign keys."""
    if _is_sqlite(url):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    new_engine = create_engine(url, pool_pre_ping=True, echo=echo, **kwargs)
    if _is_sqlite(url):
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session that is closed when the request finishes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create any missing tables on the configured database."""
    Base.metadata.create_all(bind=engine)
    logger.debug("Ensured tables on %s", engine.url.render_as_string(hide_password=True))


def drop_tables() -> None:
    Base.metadata.drop_all(bind=engine)
