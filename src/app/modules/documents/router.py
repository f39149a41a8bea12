"""
Documents Router

Endpoints:
- GET /classes/{class_id}/documents - A class's documents
- POST /classes/{class_id}/documents - Upload a document (teacher)
- GET /documents/{document_id}/download - Download as attachment
- GET /documents/{document_id}/view - Inline preview (public, for embedded viewers)
- DELETE /documents/{document_id} - Delete document and file (teacher, admin)
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import storage
from app.core.auth import get_current_user, require_staff, require_teacher
from app.core.database import get_db
from app.modules.classes.router import get_class_or_404
from app.modules.documents.models import Document
from app.modules.documents.repository import DocumentRepository
from app.modules.documents.schemas import DocumentResponse
from app.modules.shared import NotFoundError, ValidationError, require_uuid
from app.modules.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_document_or_404(db: AsyncSession, document_id: str) -> Document:
    document = await DocumentRepository.get_by_id(db, require_uuid(document_id, "Document"))
    if document is None:
        raise NotFoundError("Document", document_id)
    return document


def _stored_file_or_404(document: Document) -> Path:
    path = storage.resolve_path(storage.DOCUMENTS_DIR, document.file_path)
    if path is None:
        logger.warning(f"File for document {document.id} is missing: {document.file_path}")
        raise NotFoundError("Document file", document.id)
    return path


def _download_name(document: Document) -> str:
    """The document title, carrying the stored file's extension."""
    suffix = Path(document.file_path).suffix
    title = document.title or document.file_path
    return title if not suffix or title.lower().endswith(suffix.lower()) else f"{title}{suffix}"


@router.get("/classes/{class_id}/documents", response_model=list[DocumentResponse])
async def list_class_documents(
    class_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[DocumentResponse]:
    school_class = await get_class_or_404(db, class_id)
    rows = await DocumentRepository.list_for_class(db, school_class.id)
    return [
        DocumentResponse.model_validate(document).model_copy(
            update={"uploaded_by_name": uploader_name}
        )
        for document, uploader_name in rows
    ]


@router.post(
    "/classes/{class_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    class_id: str,
    title: str = Form(...),
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    teacher: User = Depends(require_teacher),
) -> DocumentResponse:
    """
    Upload a document for a class.

    Raises:
        NotFoundError: Unknown class
        ValidationError: No file, or file too large
    """
    school_class = await get_class_or_404(db, class_id)

    if file is None or not file.filename:
        raise ValidationError("File is required.")

    try:
        stored_name = await storage.save_upload(file, storage.DOCUMENTS_DIR)
    except storage.UploadTooLargeError as e:
        raise ValidationError(str(e), error_code="FILE_TOO_LARGE") from e

    try:
        document = await DocumentRepository.create(
            db,
            title=title.strip() or file.filename,
            file_path=stored_name,
            class_id=school_class.id,
            uploaded_by=teacher.id,
        )
        await db.commit()
    except Exception:
        await storage.delete_file(storage.DOCUMENTS_DIR, stored_name)
        raise

    return DocumentResponse.model_validate(document).model_copy(
        update={"uploaded_by_name": teacher.first_name}
    )


@router.get("/documents/{document_id}/download")
async def download_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> FileResponse:
    document = await _get_document_or_404(db, document_id)
    path = _stored_file_or_404(document)
    return FileResponse(
        path,
        media_type=storage.guess_media_type(document.file_path),
        filename=_download_name(document),
    )


@router.get("/documents/{document_id}/view")
async def view_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
) -> FileResponse:
    """Serve the file inline with a content type taken from its extension."""
    document = await _get_document_or_404(db, document_id)
    path = _stored_file_or_404(document)
    return FileResponse(
        path,
        media_type=storage.guess_media_type(document.file_path),
        content_disposition_type="inline",
        filename=_download_name(document),
    )


@router.delete("/documents/{document_id}")
async def delete_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_staff),
) -> dict[str, str]:
    """Delete a document record and its stored file."""
    document = await _get_document_or_404(db, document_id)
    file_path = document.file_path

    await DocumentRepository.delete(db, document)
    await db.commit()

    if not await storage.delete_file(storage.DOCUMENTS_DIR, file_path):
        logger.warning(f"Stored file for deleted document {document_id} was already gone")

    logger.info(f"User {user.id} deleted document {document_id}")
    return {"message": "Document deleted"}
