"""
Attendance Router

Endpoints:
- POST /classes/{class_id}/attendance - Record a class's attendance (teacher)
- GET /classes/{class_id}/attendance?date= - A class's attendance on a date
- GET /attendance?date= - All attendance on a date (admin, teacher)
"""

import datetime
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user, require_staff, require_teacher
from app.core.database import get_db
from app.modules.attendance.repository import AttendanceRepository
from app.modules.attendance.schemas import (
    AttendanceOverviewResponse,
    AttendanceResponse,
    AttendanceSubmit,
)
from app.modules.classes.router import get_class_or_404
from app.modules.shared import ValidationError
from app.modules.students.repository import StudentRepository
from app.modules.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/classes/{class_id}/attendance",
    response_model=list[AttendanceResponse],
    status_code=status.HTTP_201_CREATED,
)
async def submit_attendance(
    class_id: str,
    data: AttendanceSubmit,
    db: AsyncSession = Depends(get_db),
    teacher: User = Depends(require_teacher),
) -> list[AttendanceResponse]:
    """
    Record attendance for a class on a date, replacing any earlier sheet.

    Raises:
        NotFoundError: Unknown class
        ValidationError: Empty sheet, duplicate students or students outside the class
    """
    school_class = await get_class_or_404(db, class_id)

    if not data.attendance:
        raise ValidationError("Attendance data and date are required.")

    student_ids = [mark.student_id for mark in data.attendance]
    if len(set(student_ids)) != len(student_ids):
        raise ValidationError("Each student may appear only once in an attendance sheet.")

    enrolled = await StudentRepository.ids_in_class(db, school_class.id)
    unknown = [sid for sid in student_ids if sid not in enrolled]
    if unknown:
        raise ValidationError(
            f"Students not enrolled in class {school_class.id}: {', '.join(unknown)}"
        )

    records = await AttendanceRepository.replace_for_class_date(
        db,
        class_id=school_class.id,
        date=data.date,
        marks=[(mark.student_id, mark.status) for mark in data.attendance],
    )
    await db.commit()

    logger.info(
        f"Teacher {teacher.id} recorded attendance for class {school_class.id} on {data.date}"
    )
    return [AttendanceResponse.model_validate(r) for r in records]


@router.get("/classes/{class_id}/attendance", response_model=list[AttendanceResponse])
async def get_class_attendance(
    class_id: str,
    date: datetime.date = Query(...),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[AttendanceResponse]:
    school_class = await get_class_or_404(db, class_id)
    records = await AttendanceRepository.list_for_class_date(db, school_class.id, date)
    return [AttendanceResponse.model_validate(r) for r in records]


@router.get("/attendance", response_model=list[AttendanceOverviewResponse])
async def get_attendance_overview(
    date: datetime.date = Query(...),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
) -> list[AttendanceOverviewResponse]:
    """All attendance on a date with student and class names."""
    rows = await AttendanceRepository.list_for_date(db, date)
    return [
        AttendanceOverviewResponse.model_validate(record).model_copy(
            update={
                "student_name": student.student_name if student else None,
                "class_name": school_class.name if school_class else None,
                "class_level": school_class.level if school_class else None,
            }
        )
        for record, student, school_class in rows
    ]
