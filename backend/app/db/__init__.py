"""Database package — shared engine, session factory, and schema bootstrap."""

from app.db.base import Base, close_db, get_engine, get_session_factory, init_db
from app.db.seed import bootstrap_schema

__all__ = [
    "Base",
    "bootstrap_schema",
    "close_db",
    "get_engine",
    "get_session_factory",
    "init_db",
]
