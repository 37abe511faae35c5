"""
Cloudinary storage client.

Wraps the Cloudinary Python SDK upload API. Credentials are passed on every
call instead of through cloudinary.config(), so several providers with
different accounts can coexist in one process and nothing global is mutated.

The SDK is synchronous; uploads run in a worker thread to keep the event
loop free while the photo is in flight.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from pydantic import ValidationError

from app.errors import StorageUploadError
from app.schemas.upload import UploadOptions, UploadResult
from app.storage.base import StorageProvider

logger = logging.getLogger(__name__)


class CloudinaryProvider(StorageProvider):
    """Storage provider backed by a Cloudinary account."""

    name = "cloudinary"

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        timeout: Optional[float] = None
    ):
        self.cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self.timeout = timeout

        if not self.is_configured():
            logger.warning(
                "Cloudinary storage not configured. "
                "Set CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, and CLOUDINARY_API_SECRET."
            )
        else:
            logger.info(f"Cloudinary provider initialized for cloud: {cloud_name}")

    def is_configured(self) -> bool:
        """Check if all Cloudinary credentials are present."""
        return all([self.cloud_name, self._api_key, self._api_secret])

    def _build_params(self, options: UploadOptions) -> Dict[str, Any]:
        """Translate upload options into Cloudinary upload parameters."""
        params = {
            "folder": options.folder,
            "use_filename": options.use_filename,
            "unique_filename": options.unique_filename,
            "overwrite": options.overwrite,
            "cloud_name": self.cloud_name,
            "api_key": self._api_key,
            "api_secret": self._api_secret,
        }
        # Staged files carry a random name; keep the client's filename instead
        if options.filename:
            params["filename_override"] = options.filename
        if self.timeout is not None:
            params["timeout"] = self.timeout
        return params

    async def upload(self, file_path: str, options: UploadOptions) -> UploadResult:
        """
        Upload a staged file to Cloudinary.

        Args:
            file_path: Local path of the staged photo
            options: Folder and filename handling options

        Returns:
            UploadResult built from the Cloudinary response

        Raises:
            StorageUploadError: On missing credentials, API rejection,
                network failure, or a response without secure_url
        """
        if not self.is_configured():
            raise StorageUploadError("Cloudinary credentials not configured", provider=self.name)

        params = self._build_params(options)

        try:
            response = await asyncio.to_thread(cloudinary.uploader.upload, file_path, **params)
        except CloudinaryError as e:
            raise StorageUploadError(f"Cloudinary API error: {e}", provider=self.name) from e
        except Exception as e:
            raise StorageUploadError(f"Unexpected Cloudinary upload error: {e}", provider=self.name) from e

        try:
            return UploadResult.model_validate(response)
        except ValidationError as e:
            raise StorageUploadError(
                f"Cloudinary response missing secure_url: {response!r}",
                provider=self.name
            ) from e
