"""
Students Router

Endpoints:
- GET /students - All students with their class (admin, teacher)
- POST /students - Add a student directly (admin)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_admin, require_staff
from app.core.database import get_db
from app.modules.classes.repository import ClassRepository
from app.modules.shared import ValidationError, is_uuid
from app.modules.students.repository import StudentRepository
from app.modules.students.schemas import (
    StudentCreate,
    StudentResponse,
    StudentWithClassResponse,
)
from app.modules.users.models import User, UserRole
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/students", response_model=list[StudentWithClassResponse])
async def list_students(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
) -> list[StudentWithClassResponse]:
    """All students, newest first, with class name and level."""
    rows = await StudentRepository.list_with_class(db)
    return [
        StudentWithClassResponse.model_validate(student).model_copy(
            update={
                "class_name": school_class.name if school_class else None,
                "class_level": school_class.level if school_class else None,
            }
        )
        for student, school_class in rows
    ]


@router.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    data: StudentCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> StudentResponse:
    """
    Add a student without going through a registration request.

    Raises:
        ValidationError: Unknown class or parent_id that is not a parent account
    """
    if data.class_id and not (
        is_uuid(data.class_id) and await ClassRepository.exists(db, data.class_id)
    ):
        raise ValidationError(f"Class {data.class_id} does not exist.", error_code="INVALID_CLASS")

    if data.parent_id:
        parent = None
        if is_uuid(data.parent_id):
            parent = await UserRepository.get_by_id(db, data.parent_id)
        if parent is None or parent.role != UserRole.PARENT:
            raise ValidationError(
                f"User {data.parent_id} is not a parent account.", error_code="INVALID_PARENT"
            )

    student = await StudentRepository.create(
        db,
        student_name=data.student_name.strip(),
        parent_id=data.parent_id,
        parent_name=data.parent_name,
        parent_email=str(data.parent_email) if data.parent_email else None,
        student_dob=data.student_dob,
        grade_level=data.grade_level,
        class_id=data.class_id,
    )
    await db.commit()

    logger.info(f"Admin {admin.id} added student {student.id}")
    return StudentResponse.model_validate(student)
