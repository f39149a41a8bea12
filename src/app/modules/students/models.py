"""
Student Models

Enrolled students. Parent name and email are copied from the registration
request so a student keeps its contact details even when no parent account
exists yet (parent_id is null in that case).
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class Student(BaseModel):
    """An enrolled student."""

    __tablename__ = "students"

    student_name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Parent account (may not exist yet) plus denormalized contact details
    parent_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    parent_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    parent_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    student_dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    grade_level: Mapped[str | None] = mapped_column(String(50), nullable=True)

    class_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("classes.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Optional login account for the student
    user_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )

    __table_args__ = (Index("ix_students_student_name", "student_name"),)

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.student_name}, class_id={self.class_id})>"
