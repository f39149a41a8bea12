"""
School Update Repository

Database operations for school updates. Methods flush but never commit.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.updates.models import SchoolUpdate

logger = logging.getLogger(__name__)


class UpdateRepository:
    """Repository for school update database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        title: str,
        content: str,
        image_url: str | None = None,
    ) -> SchoolUpdate:
        update = SchoolUpdate(title=title, content=content, image_url=image_url)
        db.add(update)
        await db.flush()
        await db.refresh(update)

        logger.info(f"Created school update {update.id}")
        return update

    @staticmethod
    async def get_by_id(db: AsyncSession, update_id: str) -> SchoolUpdate | None:
        result = await db.execute(select(SchoolUpdate).where(SchoolUpdate.id == str(update_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_all(db: AsyncSession) -> list[SchoolUpdate]:
        """All updates, newest first."""
        result = await db.execute(select(SchoolUpdate).order_by(SchoolUpdate.created_at.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def delete(db: AsyncSession, update: SchoolUpdate) -> None:
        await db.delete(update)
        await db.flush()
        logger.info(f"Deleted school update {update.id}")

    @staticmethod
    async def count(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(SchoolUpdate))
        return result.scalar() or 0
