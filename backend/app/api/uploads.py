"""
Photo upload endpoint.

Implements the relay flow:
1. Parse the multipart body and pick the file under the `photo` field
2. Stage it locally and send it to the storage provider
3. Remove the local copy and return the provider's secure URL

Errors are rendered as {"error": "..."}; provider details are only logged.
"""
import logging
import time
import uuid

from fastapi import APIRouter, Depends, Request, status
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.config import Settings, get_settings
from app.errors import MissingPhotoError, PhotoRelayError, PhotoTooLargeError
from app.schemas.upload import ErrorResponse, PhotoUploadResponse
from app.services.photo_service import PhotoUploadService
from app.storage.base import StorageProvider
from app.storage.factory import get_storage_provider
from app.utils.logging import log_photo_uploaded, log_photo_upload_failed
from app.utils.metrics import photo_uploads_total

logger = logging.getLogger(__name__)

router = APIRouter()

PHOTO_FIELD = "photo"
SUCCESS_MESSAGE = "Photo téléversée avec succès"


@router.post(
    "/upload-photo",
    response_model=PhotoUploadResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "No photo file in the request"},
        413: {"model": ErrorResponse, "description": "Photo exceeds the configured size limit"},
        500: {"model": ErrorResponse, "description": "Storage provider or internal failure"},
    },
)
async def upload_photo(
    request: Request,
    provider: StorageProvider = Depends(get_storage_provider),
    app_settings: Settings = Depends(get_settings)
):
    """
    Receive one photo as multipart/form-data (field `photo`) and relay it
    to remote storage.

    Returns the public URL of the stored photo.
    """
    upload_id = uuid.uuid4().hex

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        # Unparseable body carries no usable photo
        logger.warning(
            f"Could not parse upload form: {e}",
            extra={"event": "photo_form_invalid", "upload_id": upload_id}
        )
        photo_uploads_total.labels(status="missing_file").inc()
        raise MissingPhotoError() from e

    try:
        # Only one photo per request; extra parts under the same field are ignored
        photos = [part for part in form.getlist(PHOTO_FIELD) if isinstance(part, UploadFile)]
        if not photos:
            photo_uploads_total.labels(status="missing_file").inc()
            raise MissingPhotoError()
        photo = photos[0]

        start_time = time.time()
        try:
            result = await PhotoUploadService.relay(
                photo,
                provider,
                upload_dir=app_settings.upload_dir,
                folder=app_settings.cloudinary_folder,
                upload_id=upload_id,
                max_bytes=app_settings.max_upload_bytes
            )
        except PhotoTooLargeError:
            photo_uploads_total.labels(status="too_large").inc()
            raise
        except Exception as e:
            photo_uploads_total.labels(status="failed").inc()
            relay_error = e if isinstance(e, PhotoRelayError) else PhotoRelayError()
            try:
                log_photo_upload_failed(
                    logger,
                    upload_id=upload_id,
                    error=str(e),
                    duration_ms=(time.time() - start_time) * 1000,
                    original_filename=photo.filename
                )
            except Exception:
                # Client still gets the mapped error
                logger.exception(
                    "Could not log photo upload failure",
                    extra={"event": "photo_upload_failure_unlogged", "upload_id": upload_id}
                )
            if relay_error is e:
                raise
            raise relay_error from e
    finally:
        await form.close()

    photo_uploads_total.labels(status="success").inc()
    log_photo_uploaded(
        logger,
        upload_id=upload_id,
        photo_url=result.secure_url,
        duration_ms=(time.time() - start_time) * 1000,
        original_filename=photo.filename
    )

    return PhotoUploadResponse(message=SUCCESS_MESSAGE, photo_url=result.secure_url)
