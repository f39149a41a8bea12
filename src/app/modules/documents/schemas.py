"""Document schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    file_path: str
    class_id: str
    uploaded_by: str | None = None
    uploaded_by_name: str | None = None
    uploaded_at: datetime
