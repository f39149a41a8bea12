"""Teachers module - Teacher accounts and employment details."""

from app.modules.teachers.models import Teacher
from app.modules.teachers.repository import TeacherRepository

__all__ = ["Teacher", "TeacherRepository"]
