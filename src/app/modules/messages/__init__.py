"""Messages module - Direct messages between users."""

from app.modules.messages.models import Message
from app.modules.messages.repository import MessageRepository

__all__ = ["Message", "MessageRepository"]
