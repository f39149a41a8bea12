"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.modules.users.models import UserRole


class ContactResponse(BaseModel):
    """A user shown in the chat contact list."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    role: UserRole


class ActiveUserResponse(BaseModel):
    """A user who logged in recently."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    last_login_at: datetime | None = None
