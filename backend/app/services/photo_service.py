"""
Photo relay business logic.

Stages the uploaded part, sends it to the storage provider with the fixed
folder/filename options, and leaves cleanup to the staging context manager.
"""
import logging
import time
from typing import Optional

from starlette.datastructures import UploadFile

from app.errors import StorageUploadError
from app.schemas.upload import UploadOptions, UploadResult
from app.storage.base import StorageProvider
from app.storage.temp_files import staged_upload
from app.utils.logging import log_photo_received, log_provider_request, log_provider_failure
from app.utils.metrics import (
    storage_provider_requests_total,
    storage_provider_failures_total,
    storage_upload_duration_seconds,
)

logger = logging.getLogger(__name__)


class PhotoUploadService:
    """Service for relaying uploaded photos to remote storage."""

    @staticmethod
    def build_options(folder: str, filename: Optional[str] = None) -> UploadOptions:
        """
        Options used for every photo: target folder, keep the client
        filename, no random suffix, overwrite same-named assets.
        """
        return UploadOptions(
            folder=folder,
            use_filename=True,
            unique_filename=False,
            overwrite=True,
            filename=filename,
        )

    @staticmethod
    async def send_to_provider(
        provider: StorageProvider,
        file_path: str,
        options: UploadOptions,
        upload_id: Optional[str] = None
    ) -> UploadResult:
        """
        Call the provider once, recording metrics and logs.

        Raises:
            StorageUploadError: Propagated from the provider
        """
        start_time = time.time()
        storage_provider_requests_total.labels(provider=provider.name).inc()

        try:
            result = await provider.upload(file_path, options)
        except StorageUploadError as e:
            duration = time.time() - start_time
            storage_provider_failures_total.labels(provider=provider.name).inc()
            storage_upload_duration_seconds.labels(provider=provider.name, status="failed").observe(duration)
            log_provider_failure(
                logger,
                provider=provider.name,
                operation="upload",
                error=e.detail,
                duration_ms=duration * 1000,
                upload_id=upload_id
            )
            raise

        duration = time.time() - start_time
        storage_upload_duration_seconds.labels(provider=provider.name, status="success").observe(duration)
        log_provider_request(
            logger,
            provider=provider.name,
            operation="upload",
            duration_ms=duration * 1000,
            upload_id=upload_id
        )
        return result

    @staticmethod
    async def relay(
        upload: UploadFile,
        provider: StorageProvider,
        upload_dir: str,
        folder: str,
        upload_id: Optional[str] = None,
        max_bytes: Optional[int] = None
    ) -> UploadResult:
        """
        Stage a photo, upload it, and remove the local copy.

        Args:
            upload: Multipart file part received under the photo field
            provider: Storage provider to send the photo to
            upload_dir: Directory for the transient copy
            folder: Provider folder for the photo
            upload_id: Request identifier
            max_bytes: Optional size limit for the part

        Returns:
            UploadResult from the provider

        Raises:
            PhotoTooLargeError: If the part exceeds max_bytes
            StorageUploadError: If the provider call fails
        """
        async with staged_upload(upload, upload_dir, upload_id=upload_id, max_bytes=max_bytes) as staged:
            log_photo_received(
                logger,
                upload_id=staged.upload_id,
                original_filename=staged.filename,
                size_bytes=staged.size_bytes,
                content_type=staged.content_type
            )
            options = PhotoUploadService.build_options(folder, staged.filename)
            return await PhotoUploadService.send_to_provider(
                provider, staged.path, options, upload_id=staged.upload_id
            )
