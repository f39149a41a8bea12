"""Student schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class StudentCreate(BaseModel):
    """Request body for POST /students."""

    student_name: str = Field(..., min_length=1, max_length=200)
    parent_id: str | None = None
    parent_name: str | None = Field(None, max_length=200)
    parent_email: EmailStr | None = None
    student_dob: date | None = None
    grade_level: str | None = Field(None, max_length=50)
    class_id: str | None = None


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_name: str
    parent_id: str | None = None
    parent_name: str | None = None
    parent_email: str | None = None
    student_dob: date | None = None
    grade_level: str | None = None
    class_id: str | None = None
    user_id: str | None = None
    created_at: datetime


class StudentWithClassResponse(StudentResponse):
    """A student with the name and level of their class."""

    class_name: str | None = None
    class_level: str | None = None
