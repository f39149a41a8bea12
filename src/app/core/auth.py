"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
The bearer token is validated with the security utilities in security.py
and resolved to a User record, so deactivated or deleted accounts lose
access immediately even while their tokens are still unexpired.

Usage:
    @router.get("/admin/endpoint")
    async def admin_endpoint(admin: User = Depends(require_admin)):
        ...
"""

import logging
from collections.abc import Awaitable, Callable
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import ACCESS_TOKEN_TYPE, decode_token
from app.modules.users.models import User, UserRole
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

# auto_error=False so a missing header yields our own 401 instead of FastAPI's default
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": error,
            "message": message,
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    FastAPI dependency that validates the JWT token and returns the user.

    Args:
        credentials: HTTP Bearer token from Authorization header
        db: Database session

    Returns:
        The authenticated, active User

    Raises:
        HTTPException 401: If token is missing, invalid, expired or names no user
        HTTPException 403: If the account is deactivated
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("AUTHENTICATION_REQUIRED", "Authentication required.")

    payload = decode_token(credentials.credentials)
    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired authentication token.")

    token_type = payload.get("type", ACCESS_TOKEN_TYPE)
    if token_type != ACCESS_TOKEN_TYPE:
        logger.warning(f"Invalid token type: {token_type}")
        raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError as e:
        logger.warning("Token carries a malformed 'sub' claim")
        raise _unauthorized(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e

    user = await UserRepository.get_by_id(db, user_id)
    if user is None:
        logger.warning(f"Token subject {user_id} does not exist")
        raise _unauthorized("USER_NOT_FOUND", "User not found.")

    if not user.is_active:
        logger.warning(f"Inactive user {user.id} attempted access")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "ACCOUNT_INACTIVE",
                "message": "Your account has been deactivated.",
            },
        )

    return user


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[User]]:
    """
    Build a dependency that also enforces role membership.

    With no roles, any authenticated user passes.

    Args:
        *roles: Roles allowed to call the endpoint

    Returns:
        A FastAPI dependency resolving to the authenticated User
    """
    allowed = frozenset(roles)

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if allowed and user.role not in allowed:
            logger.warning(
                f"Access denied: user {user.id} has role '{user.role.value}', "
                f"requires one of {sorted(r.value for r in allowed)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "INSUFFICIENT_PERMISSIONS",
                    "message": "Insufficient permissions.",
                },
            )
        return user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_teacher = require_roles(UserRole.TEACHER)
require_staff = require_roles(UserRole.ADMIN, UserRole.TEACHER)


__all__ = [
    "get_current_user",
    "require_roles",
    "require_admin",
    "require_teacher",
    "require_staff",
]
