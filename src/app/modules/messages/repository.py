"""
Message Repository

Database operations for direct messages. Methods flush but never commit.
"""

import logging

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.messages.models import Message

logger = logging.getLogger(__name__)


class MessageRepository:
    """Repository for message database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        from_user_id: str,
        to_user_id: str,
        message: str,
    ) -> Message:
        """Store a message."""
        new_message = Message(
            from_user_id=str(from_user_id),
            to_user_id=str(to_user_id),
            message=message,
        )
        db.add(new_message)
        await db.flush()
        await db.refresh(new_message)
        return new_message

    @staticmethod
    async def conversation(db: AsyncSession, user_a: str, user_b: str) -> list[Message]:
        """All messages exchanged between two users, oldest first."""
        user_a, user_b = str(user_a), str(user_b)
        result = await db.execute(
            select(Message)
            .where(
                or_(
                    and_(Message.from_user_id == user_a, Message.to_user_id == user_b),
                    and_(Message.from_user_id == user_b, Message.to_user_id == user_a),
                )
            )
            .order_by(Message.created_at.asc())
        )
        return list(result.scalars().all())
