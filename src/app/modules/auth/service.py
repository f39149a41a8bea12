"""
Authentication Service

Self-service registration and credential checks.

Registration creates the user and its role detail row (parent or teacher)
in one transaction. Administrator accounts cannot be self-registered; they
are created with ``scripts/seed_admin.py``.
"""

import logging
from datetime import UTC, date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password, verify_password
from app.modules.auth.schemas import RegisterRequest, UserResponse
from app.modules.parents.repository import ParentRepository
from app.modules.shared import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from app.modules.students.repository import StudentRepository
from app.modules.teachers.repository import TeacherRepository
from app.modules.users.models import User, UserRole
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

SELF_REGISTER_ROLES = (UserRole.STUDENT, UserRole.PARENT, UserRole.TEACHER)

REQUIRED_FIELDS = ("username", "password", "email", "first_name", "last_name")


def normalize_user_type(user_type: str | None) -> UserRole:
    """
    Map a free-form user type ("  Parent ") to a role open to self-registration.

    Raises:
        ValidationError: If the type is missing or not allowed
    """
    normalized = (user_type or "").strip().lower()
    for role in SELF_REGISTER_ROLES:
        if role.value == normalized:
            return role
    raise ValidationError(
        f"Invalid user type '{user_type}'. Valid types: "
        f"{', '.join(r.value for r in SELF_REGISTER_ROLES)}",
        error_code="INVALID_USER_TYPE",
    )


async def register_user(db: AsyncSession, data: RegisterRequest) -> User:
    """
    Register a new user account.

    Args:
        db: Database session
        data: Registration fields

    Returns:
        The created user

    Raises:
        ValidationError: Invalid user type, missing fields or password mismatch
        ConflictError: Username or email already registered
    """
    role = normalize_user_type(data.user_type)

    missing = [name for name in REQUIRED_FIELDS if not (getattr(data, name) or "").strip()]
    if missing:
        raise ValidationError(
            f"All required fields must be provided. Missing: {', '.join(missing)}"
        )

    if data.password != data.confirm_password:
        raise ValidationError("Passwords do not match.", error_code="PASSWORD_MISMATCH")

    username = data.username.strip()
    email = str(data.email)

    if await UserRepository.username_or_email_exists(db, username, email):
        logger.warning(f"Registration rejected, username or email taken: {username}")
        raise ConflictError("Username or email already exists.", error_code="USER_EXISTS")

    try:
        user = await UserRepository.create(
            db,
            username=username,
            email=email,
            password_hash=hash_password(data.password),
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            role=role,
        )

        if role == UserRole.PARENT:
            await ParentRepository.create(
                db,
                user_id=user.id,
                phone_number=data.phone_number,
                address=data.address,
            )
        elif role == UserRole.TEACHER:
            await TeacherRepository.create(
                db,
                user_id=user.id,
                subject_specialization=data.subject_specialization,
                hire_date=date.today(),
            )

        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same username/email
        await db.rollback()
        logger.warning(f"Registration conflict for {username}: {e.orig}")
        raise ConflictError("Username or email already exists.", error_code="USER_EXISTS") from e

    logger.info(f"Registered user {user.id} ({role.value})")
    return user


async def authenticate(db: AsyncSession, username: str, password: str) -> User:
    """
    Check credentials and record the login.

    Raises:
        AuthenticationError: Unknown username or wrong password
        PermissionDeniedError: Account deactivated
    """
    user = await UserRepository.get_by_username(db, username)

    if user is None or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for username: {username}")
        raise AuthenticationError("Invalid username or password.")

    if not user.is_active:
        logger.warning(f"Login attempt for inactive account: {username}")
        raise PermissionDeniedError(
            "Your account has been deactivated.", error_code="ACCOUNT_INACTIVE"
        )

    await UserRepository.touch_last_login(db, user, datetime.now(UTC))
    await db.commit()

    return user


async def build_user_details(db: AsyncSession, user: User) -> UserResponse:
    """User fields merged with the parent, teacher or student details."""
    details = UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role.value,
        is_active=user.is_active,
    )

    if user.role == UserRole.PARENT:
        parent = await ParentRepository.get_by_user_id(db, user.id)
        if parent:
            details.phone_number = parent.phone_number
            details.address = parent.address
    elif user.role == UserRole.TEACHER:
        teacher = await TeacherRepository.get_by_user_id(db, user.id)
        if teacher:
            details.subject_specialization = teacher.subject_specialization
            details.hire_date = teacher.hire_date
    elif user.role == UserRole.STUDENT:
        student = await StudentRepository.get_by_user_id(db, user.id)
        if student:
            details.student_id = student.id
            details.class_id = student.class_id
            details.grade_level = student.grade_level

    return details
