"""Documents module - Files teachers share with a class."""

from app.modules.documents.models import Document
from app.modules.documents.repository import DocumentRepository

__all__ = ["Document", "DocumentRepository"]
