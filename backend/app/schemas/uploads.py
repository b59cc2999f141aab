"""Pydantic schemas for the upload endpoint."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    url: str
