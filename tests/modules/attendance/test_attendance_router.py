"""
Tests for recording attendance sheets.
"""

import datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.sql.dml import Delete

from app.modules.attendance import router
from app.modules.attendance.models import Attendance, AttendanceStatus
from app.modules.attendance.repository import AttendanceRepository
from app.modules.attendance.schemas import AttendanceMark, AttendanceSubmit
from app.modules.shared import ValidationError

ROUTER = "app.modules.attendance.router"

SHEET_DATE = datetime.date(2024, 3, 11)


@pytest.fixture
def school_class(class_id):
    school_class = MagicMock()
    school_class.id = class_id
    return school_class


@pytest.fixture
def teacher():
    user = MagicMock()
    user.id = str(uuid4())
    return user


def _sheet(*marks: tuple[str, AttendanceStatus]) -> AttendanceSubmit:
    return AttendanceSubmit(
        date=SHEET_DATE,
        attendance=[AttendanceMark(student_id=sid, status=status) for sid, status in marks],
    )


def _stored(class_id: str, marks) -> list[Attendance]:
    return [
        Attendance(
            id=str(uuid4()), student_id=sid, class_id=class_id, date=SHEET_DATE, status=status
        )
        for sid, status in marks
    ]


class TestSubmitAttendance:
    @pytest.mark.asyncio
    async def test_resubmitting_replaces_the_sheet(self, mock_db, school_class, teacher):
        first, second = str(uuid4()), str(uuid4())
        marks = [(first, AttendanceStatus.PRESENT), (second, AttendanceStatus.LATE)]

        with (
            patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)),
            patch(f"{ROUTER}.StudentRepository") as mock_students,
            patch(f"{ROUTER}.AttendanceRepository") as mock_attendance,
        ):
            mock_students.ids_in_class = AsyncMock(return_value={first, second})
            mock_attendance.replace_for_class_date = AsyncMock(
                side_effect=lambda db, **kw: _stored(kw["class_id"], kw["marks"])
            )

            await router.submit_attendance(
                class_id=school_class.id, data=_sheet(*marks), db=mock_db, teacher=teacher
            )
            result = await router.submit_attendance(
                class_id=school_class.id,
                data=_sheet((first, AttendanceStatus.ABSENT)),
                db=mock_db,
                teacher=teacher,
            )

        assert mock_attendance.replace_for_class_date.await_count == 2
        last_call = mock_attendance.replace_for_class_date.call_args.kwargs
        assert last_call == {
            "class_id": school_class.id,
            "date": SHEET_DATE,
            "marks": [(first, AttendanceStatus.ABSENT)],
        }
        assert mock_db.commit.await_count == 2
        assert [(r.student_id, r.status) for r in result] == [(first, AttendanceStatus.ABSENT)]

    @pytest.mark.asyncio
    async def test_duplicate_student_is_rejected(self, mock_db, school_class, teacher):
        student = str(uuid4())

        with (
            patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)),
            patch(f"{ROUTER}.StudentRepository") as mock_students,
            patch(f"{ROUTER}.AttendanceRepository") as mock_attendance,
        ):
            mock_students.ids_in_class = AsyncMock(return_value={student})
            mock_attendance.replace_for_class_date = AsyncMock()

            with pytest.raises(ValidationError, match="only once"):
                await router.submit_attendance(
                    class_id=school_class.id,
                    data=_sheet(
                        (student, AttendanceStatus.PRESENT), (student, AttendanceStatus.ABSENT)
                    ),
                    db=mock_db,
                    teacher=teacher,
                )

        mock_attendance.replace_for_class_date.assert_not_called()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_student_outside_class_is_rejected(self, mock_db, school_class, teacher):
        enrolled, outsider = str(uuid4()), str(uuid4())

        with (
            patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)),
            patch(f"{ROUTER}.StudentRepository") as mock_students,
            patch(f"{ROUTER}.AttendanceRepository") as mock_attendance,
        ):
            mock_students.ids_in_class = AsyncMock(return_value={enrolled})
            mock_attendance.replace_for_class_date = AsyncMock()

            with pytest.raises(ValidationError) as exc_info:
                await router.submit_attendance(
                    class_id=school_class.id,
                    data=_sheet(
                        (enrolled, AttendanceStatus.PRESENT), (outsider, AttendanceStatus.PRESENT)
                    ),
                    db=mock_db,
                    teacher=teacher,
                )

        assert outsider in exc_info.value.message
        assert enrolled not in exc_info.value.message
        mock_attendance.replace_for_class_date.assert_not_called()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_sheet_is_rejected(self, mock_db, school_class, teacher):
        with patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)):
            with pytest.raises(ValidationError):
                await router.submit_attendance(
                    class_id=school_class.id, data=_sheet(), db=mock_db, teacher=teacher
                )


class TestReplaceForClassDate:
    @pytest.mark.asyncio
    async def test_deletes_existing_marks_before_adding(self, mock_db, class_id):
        mock_db.add_all = MagicMock()
        calls = []
        mock_db.execute.side_effect = lambda stmt: calls.append(("execute", stmt))
        mock_db.add_all.side_effect = lambda records: calls.append(("add_all", records))
        student = str(uuid4())

        records = await AttendanceRepository.replace_for_class_date(
            mock_db,
            class_id=class_id,
            date=SHEET_DATE,
            marks=[(student, AttendanceStatus.EXCUSED)],
        )

        assert [name for name, _ in calls] == ["execute", "add_all"]
        statement = calls[0][1]
        assert isinstance(statement, Delete)
        where = str(statement.whereclause)
        assert "attendance.class_id" in where
        assert "attendance.date" in where
        assert calls[1][1] == records
        assert records[0].student_id == student
        assert records[0].status == AttendanceStatus.EXCUSED
        mock_db.flush.assert_awaited_once()
