"""Class schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClassCreate(BaseModel):
    """Request body for POST /classes."""

    name: str = Field(..., min_length=1, max_length=100)
    level: str | None = Field(None, max_length=50)


class ClassResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    level: str | None = None
    created_at: datetime
