"""
Classes Router

Endpoints:
- GET /classes - All classes
- POST /classes - Create a class (admin)
- GET /classes/{class_id}/students - Students of a class
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user, require_admin
from app.core.database import get_db
from app.modules.classes.models import SchoolClass
from app.modules.classes.repository import ClassRepository
from app.modules.classes.schemas import ClassCreate, ClassResponse
from app.modules.shared import NotFoundError, require_uuid
from app.modules.students.repository import StudentRepository
from app.modules.students.schemas import StudentResponse
from app.modules.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_class_or_404(db: AsyncSession, class_id: str) -> SchoolClass:
    """Load a class or raise NotFoundError."""
    school_class = await ClassRepository.get_by_id(db, require_uuid(class_id, "Class"))
    if school_class is None:
        raise NotFoundError("Class", class_id)
    return school_class


@router.get("/classes", response_model=list[ClassResponse])
async def list_classes(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[ClassResponse]:
    """All classes ordered by name and level."""
    classes = await ClassRepository.list_all(db)
    return [ClassResponse.model_validate(c) for c in classes]


@router.post("/classes", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class(
    data: ClassCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ClassResponse:
    """Create a class."""
    school_class = await ClassRepository.create(db, name=data.name.strip(), level=data.level)
    await db.commit()
    return ClassResponse.model_validate(school_class)


@router.get("/classes/{class_id}/students", response_model=list[StudentResponse])
async def list_class_students(
    class_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[StudentResponse]:
    """Students of a class ordered by name."""
    await get_class_or_404(db, class_id)
    students = await StudentRepository.list_by_class(db, class_id)
    return [StudentResponse.model_validate(s) for s in students]
