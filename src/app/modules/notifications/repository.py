"""
Notification Repository

Database operations for notifications. Methods flush but never commit.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.notifications.models import REQUEST_NOTIFICATION_TYPE, Notification

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Repository for notification database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: str,
        title: str,
        message: str,
        notification_type: str = REQUEST_NOTIFICATION_TYPE,
    ) -> Notification:
        """Create an unread notification for a user."""
        notification = Notification(
            user_id=str(user_id),
            title=title,
            message=message,
            notification_type=notification_type,
            is_read=False,
        )
        db.add(notification)
        await db.flush()

        logger.info(f"Created notification {notification.id} for user {user_id}")
        return notification

    @staticmethod
    async def list_for_user(db: AsyncSession, user_id: str) -> list[Notification]:
        """A user's notifications, newest first."""
        result = await db.execute(
            select(Notification)
            .where(Notification.user_id == str(user_id))
            .order_by(Notification.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def mark_read(db: AsyncSession, notification_id: str, user_id: str) -> bool:
        """
        Mark one of the user's notifications as read.

        Returns:
            False if the notification does not exist or belongs to someone else
        """
        result = await db.execute(
            update(Notification)
            .where(
                Notification.id == str(notification_id),
                Notification.user_id == str(user_id),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
