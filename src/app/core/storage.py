"""
Upload Storage

Stores uploaded files in sub-directories of ``settings.upload_dir``.
Files are written under a unique name (timestamp + random suffix +
original name with whitespace replaced) so uploads never overwrite each
other. File I/O runs in a worker thread to keep the event loop free.
"""

import asyncio
import logging
import mimetypes
import re
import secrets
import shutil
import time
from pathlib import Path

from fastapi import UploadFile

from app.core.config import settings

logger = logging.getLogger(__name__)

DOCUMENTS_DIR = "documents"
UPDATES_DIR = "updates"


class UploadTooLargeError(ValueError):
    """Raised when an upload exceeds the configured size limit."""


def upload_root() -> Path:
    return Path(settings.upload_dir)


def ensure_upload_dirs() -> None:
    """Create the upload directories. Call on application startup."""
    for subdir in (DOCUMENTS_DIR, UPDATES_DIR):
        (upload_root() / subdir).mkdir(parents=True, exist_ok=True)


def _unique_filename(original: str) -> str:
    name = Path(original or "upload").name
    name = re.sub(r"\s+", "_", name)
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}-{name}"


def _write(upload: UploadFile, destination: Path) -> int:
    destination.parent.mkdir(parents=True, exist_ok=True)
    upload.file.seek(0, 2)
    size = upload.file.tell()
    if size > settings.max_upload_size_bytes:
        raise UploadTooLargeError(
            f"File exceeds the {settings.max_upload_size_mb} MB upload limit"
        )
    upload.file.seek(0)
    with destination.open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    return size


async def save_upload(upload: UploadFile, subdir: str) -> str:
    """
    Persist an uploaded file.

    Args:
        upload: The uploaded file
        subdir: Target sub-directory (DOCUMENTS_DIR or UPDATES_DIR)

    Returns:
        The stored file name (relative to the sub-directory)

    Raises:
        UploadTooLargeError: If the file is larger than the configured limit
    """
    filename = _unique_filename(upload.filename or "upload")
    destination = upload_root() / subdir / filename
    size = await asyncio.to_thread(_write, upload, destination)
    logger.info(f"Stored upload {subdir}/{filename} ({size} bytes)")
    return filename


def resolve_path(subdir: str, filename: str) -> Path | None:
    """
    Locate a stored file.

    Returns:
        The path, or None when the file is missing or the name escapes the directory
    """
    base = (upload_root() / subdir).resolve()
    path = (base / filename).resolve()
    if base not in path.parents or not path.is_file():
        return None
    return path


async def delete_file(subdir: str, filename: str) -> bool:
    """Remove a stored file. Returns False if it was already gone."""
    path = resolve_path(subdir, filename)
    if path is None:
        return False
    await asyncio.to_thread(path.unlink, True)
    logger.info(f"Deleted upload {subdir}/{filename}")
    return True


def public_url(subdir: str, filename: str) -> str:
    """URL under which the static mount serves a stored file."""
    return f"/uploads/{subdir}/{filename}"


def guess_media_type(filename: str) -> str:
    """Content type for inline previews, from the file extension."""
    media_type, _ = mimetypes.guess_type(filename)
    return media_type or "application/octet-stream"
