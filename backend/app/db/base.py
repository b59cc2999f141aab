"""Shared SQLAlchemy base and connection pool initialization."""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings


class Base(DeclarativeBase):
    pass


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with FK enforcement off; the milestones -> stages constraint relies on it
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def init_db(url: str | None = None) -> None:
    """Initialize the async engine (connection pool) and session factory.

    Table creation and seeding happen in app.db.seed.bootstrap_schema so a
    failing bootstrap does not prevent the pool from existing.
    """
    global _engine, _session_factory

    if _engine is not None:
        return

    settings = get_settings()
    db_url = url or settings.sqlalchemy_url

    engine_kwargs: dict = {"pool_pre_ping": True}
    if not db_url.startswith("sqlite"):
        # Hard cap at db_pool_size sessions; extra requests queue without a deadline
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = 0
        engine_kwargs["pool_timeout"] = None

    _engine = create_async_engine(db_url, **engine_kwargs)
    if _engine.dialect.name == "sqlite":
        event.listen(_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def close_db() -> None:
    """Dispose of the engine and release all connections."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


def get_engine() -> AsyncEngine:
    """Return the configured engine.

    Raises RuntimeError if init_db() has not been called.
    """
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the configured session factory.

    Raises RuntimeError if init_db() has not been called.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _session_factory
