"""Pydantic schemas for stage endpoints."""

from pydantic import BaseModel, ConfigDict

from app.db.models.stage import DEFAULT_STAGE_COLOR


class StageCreate(BaseModel):
    """Request body for POST /stages. No format checks on color beyond str coercion."""

    name: str
    color: str = DEFAULT_STAGE_COLOR


class StageResponse(BaseModel):
    id: int
    name: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseModel):
    success: bool = True
