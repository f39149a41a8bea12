"""
Parent Models

Contact details for users with the parent role, keyed by the user's id.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.modules.users.models import User


class Parent(Base):
    """Parent detail row (one-to-one with a parent User)."""

    __tablename__ = "parents"

    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    phone_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship(User, lazy="joined")

    def __repr__(self) -> str:
        return f"<Parent(user_id={self.user_id})>"
