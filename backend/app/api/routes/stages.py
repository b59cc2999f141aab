"""Stage API routes.

Endpoints:
- GET    /stages       — All stages ordered by id
- POST   /stages       — Create a stage
- DELETE /stages/{id}  — Delete a stage unless milestones reference it
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import StageInUseError
from app.db.base import get_session_factory
from app.schemas.stages import StageCreate, StageResponse, SuccessResponse
from app.services.stage_service import StageService

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_stage_service() -> StageService:
    return StageService(get_session_factory())


@router.get("", response_model=list[StageResponse])
async def list_stages(service: StageService = Depends(get_stage_service)):
    try:
        return await service.list_stages()
    except SQLAlchemyError as e:
        logger.error("list_stages_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail="Error fetching stages")


@router.post("", response_model=StageResponse, status_code=201)
async def create_stage(request: StageCreate, service: StageService = Depends(get_stage_service)):
    try:
        return await service.create_stage(request.name, request.color)
    except SQLAlchemyError as e:
        logger.error("create_stage_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail="Error creating stage")


@router.delete("/{stage_id}", response_model=SuccessResponse)
async def delete_stage(stage_id: int, service: StageService = Depends(get_stage_service)):
    """Delete a stage. Refused with 400 while any milestone references it."""
    try:
        await service.delete_stage(stage_id)
    except StageInUseError as e:
        logger.info("delete_stage_refused", stage_id=stage_id, milestone_count=e.milestone_count)
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("delete_stage_failed", stage_id=stage_id, error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail="Error deleting stage")
    return SuccessResponse()
