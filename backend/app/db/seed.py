"""Idempotent schema bootstrap and seed data for default stages."""

import structlog
from sqlalchemy import func, insert, select

from app.db.base import Base, get_engine
from app.db.models.stage import Stage

logger = structlog.get_logger(__name__)

DEFAULT_STAGES = [
    {"name": "Planning", "color": "#4f46e5"},
    {"name": "Execution", "color": "#059669"},
    {"name": "Finished", "color": "#b91c1c"},
    {"name": "On-hold", "color": "#d97706"},
]


async def bootstrap_schema() -> int:
    """Create missing tables and seed default stages when the stage table is empty.

    Runs on a single pooled connection inside one transaction. Safe to call
    on every startup.

    Returns:
        Number of stage rows inserted (0 when stages already existed).
    """
    # Import all models so metadata is populated before create_all
    import app.db.models  # noqa: F401

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

        existing = (await conn.execute(select(func.count(Stage.id)))).scalar() or 0
        if existing:
            return 0

        await conn.execute(insert(Stage), DEFAULT_STAGES)

    logger.info("default_stages_seeded", count=len(DEFAULT_STAGES))
    return len(DEFAULT_STAGES)
