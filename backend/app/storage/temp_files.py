"""
Local staging of uploaded photos.

Each multipart part is written under the upload directory with a random
name, handed to the storage provider by path, and removed afterwards.
staged_upload() is the single place where removal happens, so the file is
gone on success, on provider failure and on unexpected errors alike.
"""
import asyncio
import logging
import os
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Optional

from starlette.datastructures import UploadFile

from app.errors import PhotoTooLargeError
from app.utils.logging import log_temp_file_removed
from app.utils.metrics import temp_files_removed_total

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass
class StagedFile:
    """A photo written to local transient storage for one request."""
    upload_id: str
    path: str
    filename: Optional[str]
    content_type: Optional[str]
    size_bytes: int


def _safe_suffix(filename: Optional[str]) -> str:
    """Extension of the client filename, without any directory part."""
    if not filename:
        return ""
    suffix = Path(os.path.basename(filename.replace("\\", "/"))).suffix.lower()
    return suffix if suffix[1:].isalnum() else ""


def _copy_to_disk(source: BinaryIO, destination: str, max_bytes: Optional[int]) -> int:
    """Copy the spooled part to disk in chunks. Returns bytes written."""
    written = 0
    source.seek(0)
    with open(destination, "wb") as target:
        while True:
            chunk = source.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if max_bytes is not None and written > max_bytes:
                raise PhotoTooLargeError()
            target.write(chunk)
    return written


def remove_if_exists(path: str, upload_id: Optional[str] = None) -> bool:
    """
    Delete a staged file, tolerating a file that is already gone.

    Args:
        path: Local path to remove
        upload_id: Optional upload ID for logging

    Returns:
        True if a file was removed, False if nothing existed at path
    """
    try:
        os.remove(path)
    except FileNotFoundError:
        return False

    temp_files_removed_total.inc()
    log_temp_file_removed(logger, path=path, upload_id=upload_id)
    return True


async def stage_upload(
    upload: UploadFile,
    upload_dir: str,
    upload_id: Optional[str] = None,
    max_bytes: Optional[int] = None
) -> StagedFile:
    """
    Write an uploaded part to the upload directory.

    Args:
        upload: Multipart file part
        upload_dir: Directory for transient files (created if missing)
        upload_id: Request identifier, also used as the file stem
        max_bytes: Optional size limit for the part

    Returns:
        StagedFile describing the written file

    Raises:
        PhotoTooLargeError: If the part exceeds max_bytes
        OSError: If the file cannot be written
    """
    upload_id = upload_id or uuid.uuid4().hex
    os.makedirs(upload_dir, exist_ok=True)
    path = os.path.join(upload_dir, f"{upload_id}{_safe_suffix(upload.filename)}")

    try:
        size_bytes = await asyncio.to_thread(_copy_to_disk, upload.file, path, max_bytes)
    except BaseException:
        # Partial file must not outlive a failed write
        remove_if_exists(path, upload_id=upload_id)
        raise

    return StagedFile(
        upload_id=upload_id,
        path=path,
        filename=upload.filename,
        content_type=upload.content_type,
        size_bytes=size_bytes,
    )


@asynccontextmanager
async def staged_upload(
    upload: UploadFile,
    upload_dir: str,
    upload_id: Optional[str] = None,
    max_bytes: Optional[int] = None
) -> AsyncIterator[StagedFile]:
    """
    Stage an uploaded part and remove it when the block exits.

    Usage:
        async with staged_upload(photo, "uploads") as staged:
            await provider.upload(staged.path, options)
    """
    staged = await stage_upload(upload, upload_dir, upload_id=upload_id, max_bytes=max_bytes)
    try:
        yield staged
    finally:
        remove_if_exists(staged.path, upload_id=staged.upload_id)
