"""
Parent Service

Administrator management of parent accounts. A parent is a User with the
parent role plus a Parent detail row; both are written in one transaction.
Parents added here have no username or password and cannot log in; a later
self-registration with the same email is refused as USER_EXISTS.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.parents.models import Parent
from app.modules.parents.repository import ParentRepository
from app.modules.parents.schemas import ParentCreate, ParentResponse
from app.modules.shared import ConflictError, NotFoundError, require_uuid
from app.modules.users.models import UserRole
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


def to_response(parent: Parent) -> ParentResponse:
    return ParentResponse(
        parent_id=parent.user_id,
        first_name=parent.user.first_name,
        last_name=parent.user.last_name,
        email=parent.user.email,
        phone_number=parent.phone_number,
        address=parent.address,
    )


async def _get_or_404(db: AsyncSession, parent_id: str) -> Parent:
    parent = await ParentRepository.get_by_user_id(db, require_uuid(parent_id, "Parent"))
    if parent is None:
        raise NotFoundError("Parent", parent_id)
    return parent


async def _ensure_email_free(db: AsyncSession, email: str, owner_id: str | None = None) -> None:
    existing = await UserRepository.get_by_email(db, email)
    if existing is not None and existing.id != owner_id:
        raise ConflictError(f"Email {email} is already registered.", error_code="EMAIL_EXISTS")


async def create_parent(db: AsyncSession, data: ParentCreate) -> Parent:
    """
    Create a credential-less parent account with its contact details.

    Raises:
        ConflictError: Email already registered
    """
    email = str(data.email)
    await _ensure_email_free(db, email)

    try:
        user = await UserRepository.create(
            db,
            email=email,
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            role=UserRole.PARENT,
        )
        parent = await ParentRepository.create(
            db,
            user_id=user.id,
            phone_number=data.phone_number,
            address=data.address,
        )
        parent.user = user
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(
            f"Email {email} is already registered.", error_code="EMAIL_EXISTS"
        ) from e

    logger.info(f"Created parent {user.id}")
    return parent


async def update_parent(db: AsyncSession, parent_id: str, data: ParentCreate) -> Parent:
    """
    Replace a parent's name, email and contact details.

    Raises:
        NotFoundError: Unknown parent
        ConflictError: Email belongs to another user
    """
    parent = await _get_or_404(db, parent_id)
    email = str(data.email)
    await _ensure_email_free(db, email, owner_id=parent.user_id)

    parent.user.first_name = data.first_name.strip()
    parent.user.last_name = data.last_name.strip()
    parent.user.email = email
    parent.phone_number = data.phone_number
    parent.address = data.address

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(
            f"Email {email} is already registered.", error_code="EMAIL_EXISTS"
        ) from e

    logger.info(f"Updated parent {parent.user_id}")
    return parent


async def delete_parent(db: AsyncSession, parent_id: str) -> None:
    """
    Delete a parent account. The detail row cascades; their students keep
    the copied parent name and email with parent_id cleared.

    Raises:
        NotFoundError: Unknown parent
    """
    parent = await _get_or_404(db, parent_id)
    await UserRepository.delete(db, parent.user)
    await db.commit()
    logger.info(f"Deleted parent {parent_id}")
