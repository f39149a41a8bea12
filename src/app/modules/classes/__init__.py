"""Classes module - School classes, their students, attendance and documents."""

from app.modules.classes.models import SchoolClass
from app.modules.classes.repository import ClassRepository

__all__ = ["SchoolClass", "ClassRepository"]
