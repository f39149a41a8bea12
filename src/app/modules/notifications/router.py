"""
Notifications Router

Endpoints:
- GET /notifications - The caller's notifications, newest first
- PATCH /notifications/{notification_id}/read - Mark one as read
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.database import get_db
from app.modules.notifications.repository import NotificationRepository
from app.modules.notifications.schemas import NotificationResponse
from app.modules.shared import NotFoundError, require_uuid
from app.modules.users.models import User

router = APIRouter()


@router.get("/notifications", response_model=list[NotificationResponse])
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[NotificationResponse]:
    notifications = await NotificationRepository.list_for_user(db, user.id)
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.patch("/notifications/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> dict[str, str]:
    """Mark one of the caller's notifications as read. Other users' notifications are 404."""
    updated = await NotificationRepository.mark_read(
        db, require_uuid(notification_id, "Notification"), user.id
    )
    if not updated:
        raise NotFoundError("Notification", notification_id)
    await db.commit()
    return {"message": "Notification marked as read"}
