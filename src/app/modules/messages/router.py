"""
Messages Router

Endpoints:
- GET /messages?userId= - Conversation between the caller and another user
- POST /messages - Send a message
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.database import get_db
from app.modules.messages.repository import MessageRepository
from app.modules.messages.schemas import MessageCreate, MessageResponse
from app.modules.shared import NotFoundError, ValidationError, is_uuid, require_uuid
from app.modules.users.models import User
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/messages", response_model=list[MessageResponse])
async def get_conversation(
    user_id: str = Query(..., alias="userId"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[MessageResponse]:
    """Messages between the caller and ``userId``, oldest first."""
    if not is_uuid(user_id):
        raise ValidationError(f"Invalid user id '{user_id}'.")
    messages = await MessageRepository.conversation(db, user.id, user_id)
    return [MessageResponse.model_validate(m) for m in messages]


@router.post("/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    data: MessageCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> MessageResponse:
    """
    Send a message to another user.

    Raises:
        NotFoundError: Unknown recipient
    """
    recipient = await UserRepository.get_by_id(db, require_uuid(data.to_user_id, "User"))
    if recipient is None:
        raise NotFoundError("User", data.to_user_id)

    message = await MessageRepository.create(
        db,
        from_user_id=user.id,
        to_user_id=recipient.id,
        message=data.message,
    )
    await db.commit()

    logger.info(f"Message {message.id} sent from {user.id} to {recipient.id}")
    return MessageResponse.model_validate(message)
