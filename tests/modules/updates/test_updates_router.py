"""
Tests for the school update endpoints' image handling.

Endpoints are called directly with a mocked session; images are written
to a temporary upload directory.
"""

import io
from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError

from app.core import storage
from app.core.config import settings
from app.modules.updates import router
from app.modules.updates.models import SchoolUpdate

ROUTER = "app.modules.updates.router"


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


def _image(name: str = "assembly.jpg") -> UploadFile:
    return UploadFile(file=io.BytesIO(b"jpeg-bytes"), filename=name)


def _stored_files(upload_dir) -> list[str]:
    folder = upload_dir / storage.UPDATES_DIR
    return sorted(p.name for p in folder.glob("*")) if folder.exists() else []


def _update(image_url: str | None = None) -> SchoolUpdate:
    now = datetime.now(UTC)
    return SchoolUpdate(
        id=str(uuid4()),
        title="Sports day",
        content="Sports day is on Friday.",
        image_url=image_url,
        created_at=now,
        updated_at=now,
    )


async def _existing_image(name: str = "old.jpg") -> str:
    stored = await storage.save_upload(_image(name), storage.UPDATES_DIR)
    return stored


class TestCreateUpdate:
    @pytest.mark.asyncio
    async def test_stores_image_and_links_it(self, mock_db, admin_user, upload_dir):
        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.create = AsyncMock(
                side_effect=lambda db, **kw: _update(image_url=kw["image_url"])
            )

            result = await router.create_update(
                title="Sports day",
                content="Sports day is on Friday.",
                image=_image(),
                db=mock_db,
                admin=admin_user,
            )

        [stored] = _stored_files(upload_dir)
        assert result.image_url == f"/uploads/updates/{stored}"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_removes_image_when_save_fails(self, mock_db, admin_user, upload_dir):
        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.create = AsyncMock(side_effect=SQLAlchemyError("insert failed"))

            with pytest.raises(SQLAlchemyError):
                await router.create_update(
                    title="Sports day",
                    content="Sports day is on Friday.",
                    image=_image(),
                    db=mock_db,
                    admin=admin_user,
                )

        assert _stored_files(upload_dir) == []

    @pytest.mark.asyncio
    async def test_removes_image_when_commit_fails(self, mock_db, admin_user, upload_dir):
        mock_db.commit.side_effect = SQLAlchemyError("commit failed")

        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.create = AsyncMock(
                side_effect=lambda db, **kw: _update(image_url=kw["image_url"])
            )

            with pytest.raises(SQLAlchemyError):
                await router.create_update(
                    title="Sports day",
                    content="Sports day is on Friday.",
                    image=_image(),
                    db=mock_db,
                    admin=admin_user,
                )

        assert _stored_files(upload_dir) == []


class TestEditUpdate:
    @pytest.mark.asyncio
    async def test_replacing_image_deletes_previous_file(self, mock_db, admin_user, upload_dir):
        old_name = await _existing_image()
        update = _update(image_url=storage.public_url(storage.UPDATES_DIR, old_name))

        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=update)

            result = await router.edit_update(
                update_id=update.id,
                title="Sports day moved",
                content="Now on Saturday.",
                image=_image("new.jpg"),
                db=mock_db,
                admin=admin_user,
            )

        [stored] = _stored_files(upload_dir)
        assert stored != old_name
        assert stored.endswith("-new.jpg")
        assert result.image_url == f"/uploads/updates/{stored}"
        assert result.title == "Sports day moved"

    @pytest.mark.asyncio
    async def test_keeps_image_without_new_upload(self, mock_db, admin_user, upload_dir):
        old_name = await _existing_image()
        update = _update(image_url=storage.public_url(storage.UPDATES_DIR, old_name))

        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=update)

            result = await router.edit_update(
                update_id=update.id,
                title="Sports day",
                content="Bring water.",
                image=None,
                db=mock_db,
                admin=admin_user,
            )

        assert _stored_files(upload_dir) == [old_name]
        assert result.image_url == f"/uploads/updates/{old_name}"

    @pytest.mark.asyncio
    async def test_failed_commit_keeps_previous_and_drops_new(
        self, mock_db, admin_user, upload_dir
    ):
        old_name = await _existing_image()
        update = _update(image_url=storage.public_url(storage.UPDATES_DIR, old_name))
        mock_db.commit.side_effect = SQLAlchemyError("commit failed")

        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=update)

            with pytest.raises(SQLAlchemyError):
                await router.edit_update(
                    update_id=update.id,
                    title="Sports day",
                    content="Bring water.",
                    image=_image("new.jpg"),
                    db=mock_db,
                    admin=admin_user,
                )

        assert _stored_files(upload_dir) == [old_name]


class TestDeleteUpdate:
    @pytest.mark.asyncio
    async def test_deletes_row_and_image(self, mock_db, admin_user, upload_dir):
        name = await _existing_image()
        update = _update(image_url=storage.public_url(storage.UPDATES_DIR, name))

        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=update)
            mock_repo.delete = AsyncMock()

            result = await router.delete_update(
                update_id=update.id, db=mock_db, admin=admin_user
            )

        assert result == {"message": "Update deleted"}
        mock_repo.delete.assert_awaited_once_with(mock_db, update)
        mock_db.commit.assert_awaited_once()
        assert _stored_files(upload_dir) == []

    @pytest.mark.asyncio
    async def test_delete_without_image(self, mock_db, admin_user, upload_dir):
        update = _update()

        with patch(f"{ROUTER}.UpdateRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=update)
            mock_repo.delete = AsyncMock()

            result = await router.delete_update(
                update_id=update.id, db=mock_db, admin=admin_user
            )

        assert result == {"message": "Update deleted"}
