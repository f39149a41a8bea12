"""Notifications module - In-app notifications."""

from app.modules.notifications.models import Notification
from app.modules.notifications.repository import NotificationRepository

__all__ = ["Notification", "NotificationRepository"]
