"""
School Updates Router

Endpoints:
- GET /updates - All updates, newest first (public)
- POST /updates - Post an update with an optional image (admin)
- PUT /updates/{update_id} - Edit an update; the image changes only if a new one is sent (admin)
- DELETE /updates/{update_id} - Delete an update (admin)
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import storage
from app.core.auth import require_admin
from app.core.database import get_db
from app.modules.shared import NotFoundError, ValidationError, require_uuid
from app.modules.updates.models import SchoolUpdate
from app.modules.updates.repository import UpdateRepository
from app.modules.updates.schemas import SchoolUpdateResponse
from app.modules.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_update_or_404(db: AsyncSession, update_id: str) -> SchoolUpdate:
    update = await UpdateRepository.get_by_id(db, require_uuid(update_id, "Update"))
    if update is None:
        raise NotFoundError("Update", update_id)
    return update


async def _store_image(image: UploadFile | None) -> str | None:
    """Save an uploaded image and return its stored name, or None without an image."""
    if image is None or not image.filename:
        return None
    try:
        return await storage.save_upload(image, storage.UPDATES_DIR)
    except storage.UploadTooLargeError as e:
        raise ValidationError(str(e), error_code="FILE_TOO_LARGE") from e


def _stored_image_name(update: SchoolUpdate) -> str | None:
    """Name of the update's image in the upload directory, if it has one there."""
    prefix = storage.public_url(storage.UPDATES_DIR, "")
    if update.image_url and update.image_url.startswith(prefix):
        return update.image_url[len(prefix):] or None
    return None


async def _discard_image(stored_name: str | None) -> None:
    if stored_name and not await storage.delete_file(storage.UPDATES_DIR, stored_name):
        logger.warning(f"Update image {stored_name} was already gone")


@router.get("/updates", response_model=list[SchoolUpdateResponse])
async def list_updates(db: AsyncSession = Depends(get_db)) -> list[SchoolUpdateResponse]:
    updates = await UpdateRepository.list_all(db)
    return [SchoolUpdateResponse.model_validate(u) for u in updates]


@router.post("/updates", response_model=SchoolUpdateResponse, status_code=status.HTTP_201_CREATED)
async def create_update(
    title: str = Form(..., min_length=1, max_length=255),
    content: str = Form(..., min_length=1),
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> SchoolUpdateResponse:
    """Post an update. The stored image is removed again if the row cannot be saved."""
    stored_name = await _store_image(image)
    image_url = storage.public_url(storage.UPDATES_DIR, stored_name) if stored_name else None

    try:
        update = await UpdateRepository.create(
            db, title=title, content=content, image_url=image_url
        )
        await db.commit()
    except Exception:
        await _discard_image(stored_name)
        raise

    logger.info(f"Admin {admin.id} posted update {update.id}")
    return SchoolUpdateResponse.model_validate(update)


@router.put("/updates/{update_id}", response_model=SchoolUpdateResponse)
async def edit_update(
    update_id: str,
    title: str = Form(..., min_length=1, max_length=255),
    content: str = Form(..., min_length=1),
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> SchoolUpdateResponse:
    """
    Edit an update.

    A new image replaces the old one, whose file is deleted once the change
    is committed. Without a new image the current one is kept.
    """
    update = await _get_update_or_404(db, update_id)
    previous_image = _stored_image_name(update)

    stored_name = await _store_image(image)

    try:
        update.title = title
        update.content = content
        if stored_name:
            update.image_url = storage.public_url(storage.UPDATES_DIR, stored_name)
        await db.commit()
    except Exception:
        await _discard_image(stored_name)
        raise

    if stored_name:
        await _discard_image(previous_image)

    await db.refresh(update)
    return SchoolUpdateResponse.model_validate(update)


@router.delete("/updates/{update_id}")
async def delete_update(
    update_id: str,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> dict[str, str]:
    """Delete an update and its stored image."""
    update = await _get_update_or_404(db, update_id)
    image_name = _stored_image_name(update)

    await UpdateRepository.delete(db, update)
    await db.commit()

    await _discard_image(image_name)

    logger.info(f"Admin {admin.id} deleted update {update_id}")
    return {"message": "Update deleted"}
