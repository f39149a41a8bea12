"""
Parent Repository

Database operations for parent detail rows. Methods flush but never commit.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.parents.models import Parent
from app.modules.users.models import User, UserRole

logger = logging.getLogger(__name__)


class ParentRepository:
    """Repository for parent database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: str,
        phone_number: str | None = None,
        address: str | None = None,
    ) -> Parent:
        """Create the parent detail row for an existing parent user."""
        parent = Parent(user_id=str(user_id), phone_number=phone_number, address=address)
        db.add(parent)
        await db.flush()

        logger.info(f"Created parent details for user {user_id}")
        return parent

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: str) -> Parent | None:
        """Get a parent (with its user) by the user's ID."""
        result = await db.execute(
            select(Parent)
            .join(User, Parent.user_id == User.id)
            .where(Parent.user_id == str(user_id), User.role == UserRole.PARENT)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Parent]:
        """All parents, most recently created user first."""
        result = await db.execute(
            select(Parent)
            .join(User, Parent.user_id == User.id)
            .where(User.role == UserRole.PARENT)
            .order_by(User.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def search(db: AsyncSession, term: str) -> list[Parent]:
        """Parents whose first or last name contains ``term``."""
        pattern = f"%{term}%"
        result = await db.execute(
            select(Parent)
            .join(User, Parent.user_id == User.id)
            .where(or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern)))
            .order_by(User.first_name, User.last_name)
        )
        return list(result.scalars().all())
