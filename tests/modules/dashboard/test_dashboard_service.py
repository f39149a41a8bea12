"""
Unit tests for the dashboard service.
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.modules.dashboard.schemas import SearchType
from app.modules.dashboard.service import get_stats, search
from app.modules.registration_requests.models import RequestStatus
from app.modules.users.models import UserRole

SERVICE = "app.modules.dashboard.service"


@pytest.fixture
def search_mocks():
    with (
        patch(f"{SERVICE}.StudentRepository") as mock_students,
        patch(f"{SERVICE}.TeacherRepository") as mock_teachers,
        patch(f"{SERVICE}.ParentRepository") as mock_parents,
        patch(f"{SERVICE}.DocumentRepository") as mock_documents,
    ):
        student = MagicMock(id=str(uuid4()), student_name="Ama Mensah", parent_name="Kofi")
        school_class = MagicMock()
        school_class.name = "Senior 2"
        school_class.level = "O-Level"
        mock_students.search_by_name = AsyncMock(return_value=[(student, school_class)])

        teacher = MagicMock(user_id=str(uuid4()), subject_specialization="Physics")
        teacher.user.full_name = "Ama Owusu"
        teacher.user.email = "owusu@test.com"
        mock_teachers.search = AsyncMock(return_value=[teacher])

        mock_parents.search = AsyncMock(return_value=[])
        mock_documents.search_by_title = AsyncMock(return_value=[])

        yield {
            "students": mock_students,
            "teachers": mock_teachers,
            "parents": mock_parents,
            "documents": mock_documents,
        }


class TestSearch:
    @pytest.mark.asyncio
    async def test_short_query_returns_nothing(self, mock_db, search_mocks):
        assert await search(mock_db, " a ", SearchType.ALL) == []
        search_mocks["students"].search_by_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_all_searches_every_kind(self, mock_db, search_mocks):
        results = await search(mock_db, "Ama", SearchType.ALL)

        assert [r.type for r in results] == [SearchType.STUDENT, SearchType.TEACHER]
        assert results[0].class_name == "Senior 2"
        assert results[1].subject == "Physics"
        search_mocks["parents"].search.assert_awaited_once_with(mock_db, "Ama")
        search_mocks["documents"].search_by_title.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_type_filter(self, mock_db, search_mocks):
        results = await search(mock_db, "Ama", SearchType.TEACHER)

        assert [r.type for r in results] == [SearchType.TEACHER]
        search_mocks["students"].search_by_name.assert_not_called()
        search_mocks["documents"].search_by_title.assert_not_called()


class TestGetStats:
    @pytest.mark.asyncio
    async def test_counts(self, mock_db):
        with (
            patch(f"{SERVICE}.StudentRepository") as mock_students,
            patch(f"{SERVICE}.UserRepository") as mock_users,
            patch(f"{SERVICE}.request_repository") as mock_requests,
            patch(f"{SERVICE}.UpdateRepository") as mock_updates,
        ):
            mock_students.count = AsyncMock(return_value=12)
            role_counts = {UserRole.PARENT: 8, UserRole.TEACHER: 3, None: 24}
            mock_users.count_by_role = AsyncMock(
                side_effect=lambda db, role=None: role_counts[role]
            )
            mock_requests.count = AsyncMock(
                side_effect=lambda db, status=None: 2 if status == RequestStatus.PENDING else 9
            )
            mock_updates.count = AsyncMock(return_value=4)

            stats = await get_stats(mock_db)

        assert stats.students == 12
        assert stats.parents == 8
        assert stats.teachers == 3
        assert stats.users == 24
        assert stats.requests == 9
        assert stats.pending_requests == 2
        assert stats.updates == 4
