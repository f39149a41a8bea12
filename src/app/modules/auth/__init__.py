"""Authentication module."""

from app.modules.auth.router import router
from app.modules.auth.schemas import LoginRequest, LoginResponse, RegisterRequest, TokenResponse

__all__ = ["router", "LoginRequest", "LoginResponse", "RegisterRequest", "TokenResponse"]
