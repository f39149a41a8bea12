"""
Class Models

A school class (e.g. "Senior 2", level "O-Level"). Students, attendance,
documents and registration requests all point at a class.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class SchoolClass(BaseModel):
    """A class students are enrolled in."""

    __tablename__ = "classes"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    level: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (Index("ix_classes_name_level", "name", "level"),)

    def __repr__(self) -> str:
        return f"<SchoolClass(id={self.id}, name={self.name}, level={self.level})>"
