"""Engine, sessions and declarative base."""

from .session import Base, SessionLocal, create_tables, drop_tables, engine, get_db

__all__ = ["Base", "SessionLocal", "create_tables", "drop_tables", "engine", "get_db"]
