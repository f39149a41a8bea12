"""
Attendance Repository

Database operations for attendance records. Methods flush but never commit.
"""

import datetime
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.attendance.models import Attendance, AttendanceStatus
from app.modules.classes.models import SchoolClass
from app.modules.students.models import Student

logger = logging.getLogger(__name__)


class AttendanceRepository:
    """Repository for attendance database operations."""

    @staticmethod
    async def replace_for_class_date(
        db: AsyncSession,
        *,
        class_id: str,
        date: datetime.date,
        marks: list[tuple[str, AttendanceStatus]],
    ) -> list[Attendance]:
        """
        Record a class's attendance for one date.

        Earlier records for the same class and date are removed first, so a
        teacher can resubmit a corrected sheet.

        Args:
            db: Database session
            class_id: Class ID
            date: Attendance date
            marks: (student_id, status) pairs

        Returns:
            The stored records
        """
        await db.execute(
            delete(Attendance).where(
                Attendance.class_id == str(class_id),
                Attendance.date == date,
            )
        )

        records = [
            Attendance(student_id=str(student_id), class_id=str(class_id), date=date, status=status)
            for student_id, status in marks
        ]
        db.add_all(records)
        await db.flush()

        logger.info(f"Recorded {len(records)} attendance marks for class {class_id} on {date}")
        return records

    @staticmethod
    async def list_for_class_date(
        db: AsyncSession, class_id: str, date: datetime.date
    ) -> list[Attendance]:
        result = await db.execute(
            select(Attendance).where(
                Attendance.class_id == str(class_id),
                Attendance.date == date,
            )
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_for_date(
        db: AsyncSession, date: datetime.date
    ) -> list[tuple[Attendance, Student | None, SchoolClass | None]]:
        """All attendance on a date with student and class, ordered by class then student."""
        result = await db.execute(
            select(Attendance, Student, SchoolClass)
            .outerjoin(Student, Attendance.student_id == Student.id)
            .outerjoin(SchoolClass, Attendance.class_id == SchoolClass.id)
            .where(Attendance.date == date)
            .order_by(SchoolClass.name, Student.student_name)
        )
        return [(row[0], row[1], row[2]) for row in result.all()]
