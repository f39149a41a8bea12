"""
Dashboard Service

Aggregate counts for the admin dashboard and the global search box.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.dashboard.schemas import DashboardStats, SearchResult, SearchType
from app.modules.documents.repository import DocumentRepository
from app.modules.parents.repository import ParentRepository
from app.modules.registration_requests import repository as request_repository
from app.modules.registration_requests.models import RequestStatus
from app.modules.students.repository import StudentRepository
from app.modules.teachers.repository import TeacherRepository
from app.modules.updates.repository import UpdateRepository
from app.modules.users.models import UserRole
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


async def get_stats(db: AsyncSession) -> DashboardStats:
    """Count students, parents, teachers, requests, users and updates."""
    stats = DashboardStats(
        students=await StudentRepository.count(db),
        parents=await UserRepository.count_by_role(db, UserRole.PARENT),
        teachers=await UserRepository.count_by_role(db, UserRole.TEACHER),
        requests=await request_repository.count(db),
        pending_requests=await request_repository.count(db, RequestStatus.PENDING),
        users=await UserRepository.count_by_role(db),
        updates=await UpdateRepository.count(db),
    )
    logger.info(f"Dashboard stats: {stats.model_dump()}")
    return stats


async def search(db: AsyncSession, query: str, search_type: SearchType) -> list[SearchResult]:
    """
    Search students, teachers, parents and documents by name or title.

    Queries shorter than two characters return nothing.
    """
    term = query.strip()
    if len(term) < MIN_QUERY_LENGTH:
        return []

    def wanted(kind: SearchType) -> bool:
        return search_type in (SearchType.ALL, kind)

    results: list[SearchResult] = []

    if wanted(SearchType.STUDENT):
        for student, school_class in await StudentRepository.search_by_name(db, term):
            results.append(
                SearchResult(
                    type=SearchType.STUDENT,
                    id=student.id,
                    name=student.student_name,
                    class_name=school_class.name if school_class else None,
                    class_level=school_class.level if school_class else None,
                    parent_name=student.parent_name,
                )
            )

    if wanted(SearchType.TEACHER):
        for teacher in await TeacherRepository.search(db, term):
            results.append(
                SearchResult(
                    type=SearchType.TEACHER,
                    id=teacher.user_id,
                    name=teacher.user.full_name,
                    email=teacher.user.email,
                    subject=teacher.subject_specialization,
                )
            )

    if wanted(SearchType.PARENT):
        for parent in await ParentRepository.search(db, term):
            results.append(
                SearchResult(
                    type=SearchType.PARENT,
                    id=parent.user_id,
                    name=parent.user.full_name,
                    email=parent.user.email,
                    phone=parent.phone_number,
                )
            )

    if wanted(SearchType.DOCUMENT):
        for document in await DocumentRepository.search_by_title(db, term):
            results.append(
                SearchResult(
                    type=SearchType.DOCUMENT,
                    id=document.id,
                    name=document.title,
                    uploaded_by=document.uploaded_by,
                )
            )

    return results
