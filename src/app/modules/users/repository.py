"""
User Repository

Database operations for user accounts. Methods flush but never commit;
the caller owns the transaction.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.users.models import User, UserRole

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        email: str,
        first_name: str,
        last_name: str,
        role: UserRole,
        username: str | None = None,
        password_hash: str | None = None,
        is_active: bool = True,
    ) -> User:
        """
        Create a new user record.

        Args:
            db: Database session
            email: User's email address (unique)
            first_name: User's first name
            last_name: User's last name
            role: User's role
            username: Login name (unique, optional for admin-created accounts)
            password_hash: Hashed password (optional for admin-created accounts)
            is_active: Whether user is active

        Returns:
            Created User instance
        """
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=is_active,
        )

        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(f"Created user: {user.id} ({user.role.value})")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str | UUID) -> User | None:
        """
        Get a user by ID.

        Args:
            db: Database session
            user_id: User UUID

        Returns:
            User instance or None if not found
        """
        user_id_str = str(user_id)
        result = await db.execute(select(User).where(User.id == user_id_str))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> User | None:
        """Get a user by login name."""
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """Get a user by email address (case-insensitive)."""
        result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email_and_role(
        db: AsyncSession,
        email: str,
        role: UserRole,
    ) -> User | None:
        """
        Get a user by email address restricted to one role.

        Used by the registration workflow to find the parent account that
        submitted a request. The email comparison is case-insensitive.

        Args:
            db: Database session
            email: Email address
            role: Required role

        Returns:
            User instance or None if no user with that email has the role
        """
        result = await db.execute(
            select(User).where(
                func.lower(User.email) == email.lower(),
                User.role == role,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def username_or_email_exists(db: AsyncSession, username: str, email: str) -> bool:
        """Check whether either the username or the email is already registered."""
        result = await db.execute(
            select(User.id).where(
                or_(
                    User.username == username,
                    func.lower(User.email) == email.lower(),
                )
            )
        )
        return result.first() is not None

    @staticmethod
    async def touch_last_login(db: AsyncSession, user: User, when: datetime) -> None:
        """Record a successful login."""
        user.last_login_at = when
        await db.flush()

    @staticmethod
    async def list_contacts(
        db: AsyncSession,
        *,
        roles: list[UserRole],
        exclude_ids: set[str] | None = None,
    ) -> list[User]:
        """
        List active users with any of the given roles, leaving out some users.

        Args:
            db: Database session
            roles: Roles to include
            exclude_ids: User IDs to leave out (usually the caller)

        Returns:
            Users ordered by first and last name
        """
        query = select(User).where(User.role.in_(roles), User.is_active.is_(True))
        if exclude_ids:
            query = query.where(User.id.not_in([str(i) for i in exclude_ids]))
        query = query.order_by(User.first_name, User.last_name)

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def list_logged_in_since(db: AsyncSession, since: datetime) -> list[User]:
        """List users whose last login is at or after ``since``."""
        result = await db.execute(
            select(User).where(User.last_login_at >= since).order_by(User.last_login_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_by_role(db: AsyncSession, role: UserRole | None = None) -> int:
        """Count users, optionally restricted to one role."""
        query = select(func.count()).select_from(User)
        if role is not None:
            query = query.where(User.role == role)
        result = await db.execute(query)
        return result.scalar() or 0

    @staticmethod
    async def delete(db: AsyncSession, user: User) -> None:
        """Delete a user. Detail rows cascade at the database level."""
        await db.delete(user)
        await db.flush()
        logger.info(f"Deleted user: {user.id}")
