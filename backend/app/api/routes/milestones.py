"""Milestone API routes.

Endpoints:
- GET    /milestones       — All milestones joined with stage name/color, ordered by item
- POST   /milestones       — Create a milestone
- PUT    /milestones/{id}  — Replace every mutable field (item excluded)
- DELETE /milestones/{id}  — Delete a milestone

Update and delete never report a missing id; they return success either way.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import get_session_factory
from app.schemas.milestones import (
    MilestoneCreate,
    MilestoneCreatedResponse,
    MilestoneResponse,
    MilestoneUpdate,
)
from app.schemas.stages import SuccessResponse
from app.services.milestone_service import MilestoneService

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_milestone_service() -> MilestoneService:
    return MilestoneService(get_session_factory())


@router.get("", response_model=list[MilestoneResponse])
async def list_milestones(service: MilestoneService = Depends(get_milestone_service)):
    try:
        return await service.list_milestones()
    except SQLAlchemyError as e:
        logger.error("list_milestones_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail="Error fetching milestones")


@router.post("", response_model=MilestoneCreatedResponse, status_code=201)
async def create_milestone(
    request: MilestoneCreate, service: MilestoneService = Depends(get_milestone_service)
):
    """Create a milestone. An unknown stage_id is rejected by the foreign key (500)."""
    try:
        milestone_id = await service.create_milestone(request)
    except SQLAlchemyError as e:
        logger.error(
            "create_milestone_failed",
            stage_id=request.stage_id,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise HTTPException(status_code=500, detail="Error creating milestone")
    return MilestoneCreatedResponse(id=milestone_id)


@router.put("/{milestone_id}", response_model=SuccessResponse)
async def update_milestone(
    milestone_id: int,
    request: MilestoneUpdate,
    service: MilestoneService = Depends(get_milestone_service),
):
    try:
        await service.update_milestone(milestone_id, request)
    except SQLAlchemyError as e:
        logger.error(
            "update_milestone_failed",
            milestone_id=milestone_id,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise HTTPException(status_code=500, detail="Error updating milestone")
    return SuccessResponse()


@router.delete("/{milestone_id}", response_model=SuccessResponse)
async def delete_milestone(milestone_id: int, service: MilestoneService = Depends(get_milestone_service)):
    try:
        await service.delete_milestone(milestone_id)
    except SQLAlchemyError as e:
        logger.error(
            "delete_milestone_failed",
            milestone_id=milestone_id,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise HTTPException(status_code=500, detail="Error deleting milestone")
    return SuccessResponse()
