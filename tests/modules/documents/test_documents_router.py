"""
Tests for class document uploads.
"""

import io
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError

from app.core import storage
from app.core.config import settings
from app.modules.documents import router
from app.modules.documents.models import Document
from app.modules.shared import ValidationError

ROUTER = "app.modules.documents.router"


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


@pytest.fixture
def school_class(class_id):
    school_class = MagicMock()
    school_class.id = class_id
    return school_class


@pytest.fixture
def teacher():
    user = MagicMock()
    user.id = str(uuid4())
    user.first_name = "Esi"
    return user


def _file(name: str = "week 3 notes.pdf") -> UploadFile:
    return UploadFile(file=io.BytesIO(b"%PDF-1.4"), filename=name)


def _stored_files(upload_dir) -> list[str]:
    folder = upload_dir / storage.DOCUMENTS_DIR
    return sorted(p.name for p in folder.glob("*")) if folder.exists() else []


def _document(**fields) -> Document:
    return Document(id=str(uuid4()), uploaded_at=datetime.now(UTC), **fields)


class TestUploadDocument:
    @pytest.mark.asyncio
    async def test_stores_file_and_row(self, mock_db, school_class, teacher, upload_dir):
        with (
            patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)),
            patch(f"{ROUTER}.DocumentRepository") as mock_repo,
        ):
            mock_repo.create = AsyncMock(side_effect=lambda db, **kw: _document(**kw))

            result = await router.upload_document(
                class_id=school_class.id,
                title="Week 3 notes",
                file=_file(),
                db=mock_db,
                teacher=teacher,
            )

        [stored] = _stored_files(upload_dir)
        assert result.file_path == stored
        assert result.uploaded_by_name == "Esi"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_file_removed_when_row_cannot_be_saved(
        self, mock_db, school_class, teacher, upload_dir
    ):
        with (
            patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)),
            patch(f"{ROUTER}.DocumentRepository") as mock_repo,
        ):
            mock_repo.create = AsyncMock(side_effect=SQLAlchemyError("insert failed"))

            with pytest.raises(SQLAlchemyError):
                await router.upload_document(
                    class_id=school_class.id,
                    title="Week 3 notes",
                    file=_file(),
                    db=mock_db,
                    teacher=teacher,
                )

        assert _stored_files(upload_dir) == []
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_file_removed_when_commit_fails(
        self, mock_db, school_class, teacher, upload_dir
    ):
        mock_db.commit.side_effect = SQLAlchemyError("commit failed")

        with (
            patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)),
            patch(f"{ROUTER}.DocumentRepository") as mock_repo,
        ):
            mock_repo.create = AsyncMock(side_effect=lambda db, **kw: _document(**kw))

            with pytest.raises(SQLAlchemyError):
                await router.upload_document(
                    class_id=school_class.id,
                    title="Week 3 notes",
                    file=_file(),
                    db=mock_db,
                    teacher=teacher,
                )

        assert _stored_files(upload_dir) == []

    @pytest.mark.asyncio
    async def test_missing_file_is_rejected(self, mock_db, school_class, teacher, upload_dir):
        with patch(f"{ROUTER}.get_class_or_404", new=AsyncMock(return_value=school_class)):
            with pytest.raises(ValidationError, match="File is required"):
                await router.upload_document(
                    class_id=school_class.id,
                    title="Week 3 notes",
                    file=None,
                    db=mock_db,
                    teacher=teacher,
                )

        assert _stored_files(upload_dir) == []
