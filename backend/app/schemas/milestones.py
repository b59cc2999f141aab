"""Pydantic schemas for milestone endpoints.

Create and update bodies share the same normalisation: a falsy
completion_date ("" or null or absent) is stored as NULL.
"""

from datetime import date

from pydantic import BaseModel, field_validator


class MilestoneUpdate(BaseModel):
    """Request body for PUT /milestones/{id}.

    Full replace of every listed field. `item` is not part of the contract
    and is ignored if sent.
    """

    stage_id: int
    start_date: date
    location: str
    completion_date: date | None = None
    comments: str | None = None
    illustration: str | None = None

    @field_validator("completion_date", mode="before")
    @classmethod
    def _falsy_completion_date_is_null(cls, value):
        return value or None


class MilestoneCreate(MilestoneUpdate):
    """Request body for POST /milestones."""

    item: int


class MilestoneResponse(BaseModel):
    """A milestone row joined with its stage's name and color."""

    id: int
    item: int
    stage_id: int
    start_date: date
    location: str
    completion_date: date | None = None
    comments: str | None = None
    illustration: str | None = None
    stage: str
    stage_color: str


class MilestoneCreatedResponse(BaseModel):
    id: int
    success: bool = True
