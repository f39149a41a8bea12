"""
Registration Request Models

A parent submits a registration request for a student; an administrator
later approves or rejects it. Approval creates the Student record, whose
id is kept on the request.
"""

import enum
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import ENUM, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class RequestStatus(str, enum.Enum):
    """Status of a registration request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RegistrationRequest(BaseModel):
    """
    Student registration request.

    Status moves once, from pending to approved or rejected. The decision
    columns (processed_at, processed_by, decision_reason, student_id) stay
    null while the request is pending.
    """

    __tablename__ = "registration_requests"

    # Student information
    student_name: Mapped[str] = mapped_column(String(200), nullable=False)
    student_dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    grade_level: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Parent contact
    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), nullable=False)

    class_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("classes.id", ondelete="RESTRICT"),
        nullable=False,
    )

    # Status tracking
    status: Mapped[RequestStatus] = mapped_column(
        ENUM(
            RequestStatus,
            name="registration_request_status",
            create_type=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=RequestStatus.PENDING,
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    processed_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    decision_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Student created on approval
    student_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("students.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_registration_requests_status", "status"),
        Index("ix_registration_requests_submitted_at", "submitted_at"),
        Index("ix_registration_requests_parent_email", "parent_email"),
    )

    def __repr__(self) -> str:
        return f"<RegistrationRequest(id={self.id}, status={self.status.value})>"
