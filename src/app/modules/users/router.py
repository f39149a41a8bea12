"""
Users Router

Chat contacts and presence.

Endpoints:
- GET /users?type=student|teacher|staff&exclude= - Contacts for the chat panel
- GET /active-users - Users who logged in recently
"""

import logging
from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.config import settings
from app.core.database import get_db
from app.modules.shared import ValidationError
from app.modules.users.models import User, UserRole
from app.modules.users.repository import UserRepository
from app.modules.users.schemas import ActiveUserResponse, ContactResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class ContactType(str, Enum):
    """Contact groups shown in the chat panel."""

    STUDENT = "student"
    TEACHER = "teacher"
    STAFF = "staff"


CONTACT_ROLES: dict[ContactType, list[UserRole]] = {
    ContactType.STUDENT: [UserRole.STUDENT],
    ContactType.TEACHER: [UserRole.TEACHER],
    ContactType.STAFF: [UserRole.PARENT, UserRole.TEACHER, UserRole.ADMIN],
}


@router.get("/users", response_model=list[ContactResponse])
async def list_contacts(
    contact_type: ContactType = Query(..., alias="type"),
    exclude: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[ContactResponse]:
    """
    List chat contacts of one type.

    The caller is always left out. ``exclude`` leaves out one more user.
    """
    exclude_ids = {user.id}
    if exclude:
        try:
            exclude_ids.add(str(UUID(exclude)))
        except ValueError as e:
            raise ValidationError(f"Invalid user id '{exclude}'.") from e

    contacts = await UserRepository.list_contacts(
        db, roles=CONTACT_ROLES[contact_type], exclude_ids=exclude_ids
    )
    return [ContactResponse.model_validate(contact) for contact in contacts]


@router.get("/active-users", response_model=list[ActiveUserResponse])
async def list_active_users(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[ActiveUserResponse]:
    """Users whose last login falls within the active window."""
    since = datetime.now(UTC) - timedelta(minutes=settings.active_user_window_minutes)
    users = await UserRepository.list_logged_in_since(db, since)
    return [ActiveUserResponse.model_validate(u) for u in users]
