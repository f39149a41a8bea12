"""
Document Repository

Database operations for class documents. Methods flush but never commit.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.documents.models import Document
from app.modules.users.models import User

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Repository for document database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        title: str,
        file_path: str,
        class_id: str,
        uploaded_by: str | None,
    ) -> Document:
        document = Document(
            title=title,
            file_path=file_path,
            class_id=str(class_id),
            uploaded_by=str(uploaded_by) if uploaded_by else None,
        )
        db.add(document)
        await db.flush()
        await db.refresh(document)

        logger.info(f"Created document {document.id} for class {class_id}")
        return document

    @staticmethod
    async def get_by_id(db: AsyncSession, document_id: str) -> Document | None:
        result = await db.execute(select(Document).where(Document.id == str(document_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_for_class(
        db: AsyncSession, class_id: str
    ) -> list[tuple[Document, str | None]]:
        """A class's documents, newest first, with the uploader's first name."""
        result = await db.execute(
            select(Document, User.first_name)
            .outerjoin(User, Document.uploaded_by == User.id)
            .where(Document.class_id == str(class_id))
            .order_by(Document.uploaded_at.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    @staticmethod
    async def search_by_title(db: AsyncSession, term: str) -> list[Document]:
        result = await db.execute(
            select(Document)
            .where(Document.title.ilike(f"%{term}%"))
            .order_by(Document.uploaded_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def delete(db: AsyncSession, document: Document) -> None:
        await db.delete(document)
        await db.flush()
        logger.info(f"Deleted document {document.id}")
