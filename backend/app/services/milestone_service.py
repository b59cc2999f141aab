"""MilestoneService — CRUD over milestones, listed joined with their stage.

No existence checks: update and delete of an unknown id succeed silently,
and an unknown stage_id is rejected by the foreign key, not here.
"""

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.models.milestone import Milestone
from app.db.models.stage import Stage
from app.schemas.milestones import MilestoneCreate, MilestoneResponse, MilestoneUpdate

logger = structlog.get_logger(__name__)


class MilestoneService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_milestones(self) -> list[MilestoneResponse]:
        """All milestones with stage name/color, ordered by item (ties by id)."""
        stmt = (
            select(
                Milestone,
                Stage.name.label("stage"),
                Stage.color.label("stage_color"),
            )
            .join(Stage, Milestone.stage_id == Stage.id)
            .order_by(Milestone.item, Milestone.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [
                MilestoneResponse(
                    id=m.id,
                    item=m.item,
                    stage_id=m.stage_id,
                    start_date=m.start_date,
                    location=m.location,
                    completion_date=m.completion_date,
                    comments=m.comments,
                    illustration=m.illustration,
                    stage=stage,
                    stage_color=stage_color,
                )
                for m, stage, stage_color in result.all()
            ]

    async def create_milestone(self, data: MilestoneCreate) -> int:
        async with self._session_factory() as session:
            milestone = Milestone(**data.model_dump())
            session.add(milestone)
            await session.commit()
            logger.info("milestone_created", milestone_id=milestone.id, stage_id=milestone.stage_id)
            return milestone.id

    async def update_milestone(self, milestone_id: int, data: MilestoneUpdate) -> None:
        async with self._session_factory() as session:
            await session.execute(
                update(Milestone)
                .where(Milestone.id == milestone_id)
                .values(**data.model_dump())
            )
            await session.commit()
            logger.info("milestone_updated", milestone_id=milestone_id)

    async def delete_milestone(self, milestone_id: int) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(Milestone).where(Milestone.id == milestone_id))
            await session.commit()
            logger.info("milestone_deleted", milestone_id=milestone_id)
