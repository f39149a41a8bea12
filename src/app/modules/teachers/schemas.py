"""Teacher schemas."""

from datetime import date

from pydantic import BaseModel


class TeacherResponse(BaseModel):
    """A teacher as listed for administrators."""

    teacher_id: str
    first_name: str
    last_name: str
    email: str
    subject_specialization: str | None = None
    hire_date: date | None = None
