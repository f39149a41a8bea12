"""
Shared building blocks for all modules: model base classes and the
service error taxonomy.
"""

from app.modules.shared.errors import (
    AuthenticationError,
    ConflictError,
    InvariantError,
    NotFoundError,
    PermissionDeniedError,
    ServiceError,
    StorageError,
    ValidationError,
    to_http_exception,
)
from app.modules.shared.ids import is_uuid, require_uuid
from app.modules.shared.models import BaseModel

__all__ = [
    "BaseModel",
    "ServiceError",
    "ValidationError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "InvariantError",
    "to_http_exception",
    "is_uuid",
    "require_uuid",
]
