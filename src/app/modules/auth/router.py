"""Authentication router."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import client_ip, enforce_rate_limit
from app.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.modules.auth import service
from app.modules.auth.schemas import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from app.modules.shared import ServiceError, to_http_exception
from app.modules.users.models import User
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_LOGIN = (10, 60)  # 10 attempts per minute per IP
RATE_LIMIT_REGISTER = (10, 3600)  # 10 registrations per hour per IP


def _invalid_refresh_token() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": "INVALID_TOKEN",
            "message": "Invalid or expired refresh token.",
        },
    )


def _access_token_for(user: User) -> str:
    additional_claims = {
        "email": user.email,
        "role": user.role.value,
        "name": user.full_name,
    }
    return create_access_token(subject=str(user.id), additional_claims=additional_claims)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    """
    Register a student, parent or teacher account.

    Raises:
        HTTPException 400: Invalid user type, missing fields, passwords differ
        HTTPException 409: Username or email already exists
    """
    await enforce_rate_limit(f"auth:register:{client_ip(request)}", *RATE_LIMIT_REGISTER)

    try:
        user = await service.register_user(db, data)
    except ServiceError as e:
        raise to_http_exception(e) from e

    return RegisterResponse(id=user.id)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticate user and return JWT tokens.

    Args:
        credentials: Username and password
        db: Database session

    Returns:
        Access token, refresh token, and user info merged with role details

    Raises:
        HTTPException 401: Invalid credentials
        HTTPException 403: Account inactive
        HTTPException 429: Too many attempts
    """
    await enforce_rate_limit(f"auth:login:{client_ip(request)}", *RATE_LIMIT_LOGIN)

    try:
        user = await service.authenticate(db, credentials.username, credentials.password)
    except ServiceError as e:
        raise to_http_exception(e) from e

    access_token = _access_token_for(user)
    refresh_token = create_refresh_token(subject=str(user.id))

    logger.info(f"User logged in: {user.id} (role: {user.role.value})")

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        user=await service.build_user_details(db, user),
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    data: RefreshRequest,
    db: AsyncSession = Depends(get_db),
) -> TokenResponse:
    """
    Exchange a refresh token for a new access token.

    Raises:
        HTTPException 401: Invalid or expired refresh token, or unknown/inactive user
    """
    payload = decode_token(data.refresh_token)
    if payload is None or payload.get("type") != REFRESH_TOKEN_TYPE:
        logger.warning("Refresh attempted with an invalid token")
        raise _invalid_refresh_token()

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError as e:
        raise _invalid_refresh_token() from e

    user = await UserRepository.get_by_id(db, user_id)
    if user is None or not user.is_active:
        logger.warning(f"Refresh for unknown or inactive user {user_id}")
        raise _invalid_refresh_token()

    return TokenResponse(access_token=_access_token_for(user))
