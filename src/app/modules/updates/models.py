"""
School Update Models

News items shown on the public landing page.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class SchoolUpdate(BaseModel):
    """A school news item with an optional image."""

    __tablename__ = "school_updates"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
