"""
Class Repository

Database operations for school classes.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.classes.models import SchoolClass

logger = logging.getLogger(__name__)


class ClassRepository:
    """Repository for class database operations."""

    @staticmethod
    async def create(db: AsyncSession, *, name: str, level: str | None = None) -> SchoolClass:
        """Create a class."""
        school_class = SchoolClass(name=name, level=level)
        db.add(school_class)
        await db.flush()
        await db.refresh(school_class)

        logger.info(f"Created class: {school_class.id} ({school_class.name})")
        return school_class

    @staticmethod
    async def get_by_id(db: AsyncSession, class_id: str) -> SchoolClass | None:
        """Get a class by ID."""
        result = await db.execute(select(SchoolClass).where(SchoolClass.id == str(class_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def exists(db: AsyncSession, class_id: str) -> bool:
        """Check whether a class with this ID exists."""
        result = await db.execute(select(SchoolClass.id).where(SchoolClass.id == str(class_id)))
        return result.first() is not None

    @staticmethod
    async def list_all(db: AsyncSession) -> list[SchoolClass]:
        """All classes ordered by name, then level."""
        result = await db.execute(select(SchoolClass).order_by(SchoolClass.name, SchoolClass.level))
        return list(result.scalars().all())
