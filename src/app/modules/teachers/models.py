"""
Teacher Models

Employment details for users with the teacher role, keyed by the user's id.
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.modules.users.models import User


class Teacher(Base):
    """Teacher detail row (one-to-one with a teacher User)."""

    __tablename__ = "teachers"

    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    subject_specialization: Mapped[str | None] = mapped_column(String(100), nullable=True)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    user: Mapped[User] = relationship(User, lazy="joined")

    def __repr__(self) -> str:
        return f"<Teacher(user_id={self.user_id})>"
