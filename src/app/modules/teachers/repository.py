"""
Teacher Repository

Database operations for teacher detail rows. Methods flush but never commit.
"""

import logging
from datetime import date

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.teachers.models import Teacher
from app.modules.users.models import User

logger = logging.getLogger(__name__)


class TeacherRepository:
    """Repository for teacher database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: str,
        subject_specialization: str | None = None,
        hire_date: date | None = None,
    ) -> Teacher:
        """Create the teacher detail row for an existing teacher user."""
        teacher = Teacher(
            user_id=str(user_id),
            subject_specialization=subject_specialization,
            hire_date=hire_date,
        )
        db.add(teacher)
        await db.flush()

        logger.info(f"Created teacher details for user {user_id}")
        return teacher

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: str) -> Teacher | None:
        result = await db.execute(select(Teacher).where(Teacher.user_id == str(user_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Teacher]:
        """All teachers ordered by name."""
        result = await db.execute(
            select(Teacher)
            .join(User, Teacher.user_id == User.id)
            .order_by(User.first_name, User.last_name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def search(db: AsyncSession, term: str) -> list[Teacher]:
        """Teachers whose first or last name contains ``term``."""
        pattern = f"%{term}%"
        result = await db.execute(
            select(Teacher)
            .join(User, Teacher.user_id == User.id)
            .where(or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern)))
            .order_by(User.first_name, User.last_name)
        )
        return list(result.scalars().all())
