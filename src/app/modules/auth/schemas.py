"""Authentication schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class RegisterRequest(BaseModel):
    """Self-service registration. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str | None = Field(None, max_length=100)
    password: str | None = Field(None, max_length=128)
    confirm_password: str | None = Field(None, max_length=128)
    email: EmailStr | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    user_type: str | None = None

    # Parent details
    phone_number: str | None = Field(None, max_length=30)
    address: str | None = None

    # Teacher details
    subject_specialization: str | None = Field(None, max_length=100)


class RegisterResponse(BaseModel):
    """Response after a successful registration."""

    id: str
    message: str = "User registered successfully"


class LoginRequest(BaseModel):
    """Login request schema."""

    username: str
    password: str


class RefreshRequest(BaseModel):
    """Refresh token exchange."""

    refresh_token: str


class TokenResponse(BaseModel):
    """Token response schema."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """User details returned at login, merged with the role details."""

    id: str
    username: str | None = None
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool

    # Parent
    phone_number: str | None = None
    address: str | None = None

    # Teacher
    subject_specialization: str | None = None
    hire_date: date | None = None

    # Student
    student_id: str | None = None
    class_id: str | None = None
    grade_level: str | None = None


class LoginResponse(BaseModel):
    """Login response schema."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse
