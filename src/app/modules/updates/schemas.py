"""School update schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SchoolUpdateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime
