"""
Teachers Router

Endpoints:
- GET /teachers - All teachers (admin)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_admin
from app.core.database import get_db
from app.modules.teachers.models import Teacher
from app.modules.teachers.repository import TeacherRepository
from app.modules.teachers.schemas import TeacherResponse
from app.modules.users.models import User

router = APIRouter()


def to_response(teacher: Teacher) -> TeacherResponse:
    return TeacherResponse(
        teacher_id=teacher.user_id,
        first_name=teacher.user.first_name,
        last_name=teacher.user.last_name,
        email=teacher.user.email,
        subject_specialization=teacher.subject_specialization,
        hire_date=teacher.hire_date,
    )


@router.get("/teachers", response_model=list[TeacherResponse])
async def list_teachers(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> list[TeacherResponse]:
    teachers = await TeacherRepository.list_all(db)
    return [to_response(t) for t in teachers]
