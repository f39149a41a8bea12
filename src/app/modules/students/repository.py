"""
Student Repository

Database operations for students. Methods flush but never commit.
"""

import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.classes.models import SchoolClass
from app.modules.students.models import Student

logger = logging.getLogger(__name__)


class StudentRepository:
    """Repository for student database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        student_name: str,
        parent_id: str | None = None,
        parent_name: str | None = None,
        parent_email: str | None = None,
        student_dob: date | None = None,
        grade_level: str | None = None,
        class_id: str | None = None,
    ) -> Student:
        """
        Create a student record.

        Args:
            db: Database session
            student_name: Student's full name
            parent_id: Parent user ID, None when no parent account exists
            parent_name: Parent's name as given at registration
            parent_email: Parent's email as given at registration
            student_dob: Date of birth
            grade_level: Grade level
            class_id: Class the student is enrolled in

        Returns:
            Created Student instance
        """
        student = Student(
            student_name=student_name,
            parent_id=parent_id,
            parent_name=parent_name,
            parent_email=parent_email,
            student_dob=student_dob,
            grade_level=grade_level,
            class_id=class_id,
        )
        db.add(student)
        await db.flush()
        await db.refresh(student)

        logger.info(f"Created student: {student.id} (class={student.class_id})")
        return student

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: str) -> Student | None:
        """Get the student record linked to a login account."""
        result = await db.execute(select(Student).where(Student.user_id == str(user_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_with_class(db: AsyncSession) -> list[tuple[Student, SchoolClass | None]]:
        """All students with their class, newest first."""
        result = await db.execute(
            select(Student, SchoolClass)
            .outerjoin(SchoolClass, Student.class_id == SchoolClass.id)
            .order_by(Student.created_at.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    @staticmethod
    async def list_by_class(db: AsyncSession, class_id: str) -> list[Student]:
        """Students of one class ordered by name."""
        result = await db.execute(
            select(Student)
            .where(Student.class_id == str(class_id))
            .order_by(Student.student_name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def ids_in_class(db: AsyncSession, class_id: str) -> set[str]:
        """IDs of the students enrolled in a class."""
        result = await db.execute(select(Student.id).where(Student.class_id == str(class_id)))
        return {str(row[0]) for row in result.all()}

    @staticmethod
    async def search_by_name(
        db: AsyncSession, term: str
    ) -> list[tuple[Student, SchoolClass | None]]:
        """Students whose name contains ``term`` (case-insensitive)."""
        result = await db.execute(
            select(Student, SchoolClass)
            .outerjoin(SchoolClass, Student.class_id == SchoolClass.id)
            .where(Student.student_name.ilike(f"%{term}%"))
            .order_by(Student.student_name)
        )
        return [(row[0], row[1]) for row in result.all()]

    @staticmethod
    async def count(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Student))
        return result.scalar() or 0
