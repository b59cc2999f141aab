"""StageService — list, create and guarded delete of stages."""

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import StageInUseError
from app.db.models.milestone import Milestone
from app.db.models.stage import Stage

logger = structlog.get_logger(__name__)


class StageService:
    """Stage persistence. Takes a session_factory so each call uses its own pooled session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_stages(self) -> list[Stage]:
        async with self._session_factory() as session:
            result = await session.execute(select(Stage).order_by(Stage.id))
            return list(result.scalars().all())

    async def create_stage(self, name: str, color: str) -> Stage:
        async with self._session_factory() as session:
            stage = Stage(name=name, color=color)
            session.add(stage)
            await session.commit()
            await session.refresh(stage)
            logger.info("stage_created", stage_id=stage.id, name=stage.name)
            return stage

    async def delete_stage(self, stage_id: int) -> None:
        """Delete a stage unless milestones still reference it.

        Deleting an id that does not exist is a no-op.

        Raises:
            StageInUseError: one or more milestones use this stage.
        """
        async with self._session_factory() as session:
            in_use = (
                await session.execute(
                    select(func.count(Milestone.id)).where(Milestone.stage_id == stage_id)
                )
            ).scalar() or 0
            if in_use > 0:
                raise StageInUseError(stage_id, in_use)

            await session.execute(delete(Stage).where(Stage.id == stage_id))
            await session.commit()
            logger.info("stage_deleted", stage_id=stage_id)
