"""Parent schemas."""

from pydantic import BaseModel, EmailStr, Field


class ParentCreate(BaseModel):
    """Request body for POST /parents and PUT /parents/{id}."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone_number: str | None = Field(None, max_length=30)
    address: str | None = None


class ParentResponse(BaseModel):
    """A parent as listed for administrators."""

    parent_id: str
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    address: str | None = None
