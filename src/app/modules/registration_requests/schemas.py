"""
Registration Requests Schemas

Pydantic schemas for request validation and response serialization.
Incoming bodies accept both camelCase (``studentName``) and snake_case
(``student_name``) keys.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

# Re-use enums from models
from app.modules.registration_requests.models import RequestStatus


class RegistrationRequestCreate(BaseModel):
    """
    Request body for POST /registration-request.

    Required fields are checked by the service so that a missing or blank
    value produces a single 400 naming every missing field.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    student_name: str | None = Field(None, max_length=200)
    parent_name: str | None = Field(None, max_length=200)
    parent_email: EmailStr | None = None
    student_dob: date | None = None
    grade_level: str | None = Field(None, max_length=50)
    class_id: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        """Treat blank strings as missing values."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RegistrationRequestSubmitted(BaseModel):
    """Response after submitting a registration request."""

    id: str
    status: RequestStatus
    message: str


class RejectRequest(BaseModel):
    """Optional body for PATCH /registration-requests/{id}/reject."""

    reason: str | None = Field(None, max_length=1000)


class RegistrationRequestResponse(BaseModel):
    """A registration request as listed for administrators."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    student_name: str
    student_dob: date | None = None
    grade_level: str | None = None
    parent_name: str
    parent_email: str
    class_id: str
    status: RequestStatus
    submitted_at: datetime
    processed_at: datetime | None = None
    processed_by: str | None = None
    decision_reason: str | None = None
    student_id: str | None = None


class DecisionResponse(BaseModel):
    """Response after approving or rejecting a request."""

    id: str
    status: RequestStatus
    student_id: str | None = None
    parent_notified: bool
    message: str
