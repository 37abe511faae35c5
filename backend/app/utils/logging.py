"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- upload_id
- original_filename
- duration_ms

Usage:
    from app.utils.logging import configure_logging, log_photo_uploaded

    configure_logging('photo-relay', 'INFO')
    log_photo_uploaded(logger, upload_id='3f2a', photo_url='https://...', duration_ms=812.4)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier (photo-relay)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for container logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    upload_id: Optional[str] = None,
    original_filename: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        upload_id: Optional per-request upload ID
        original_filename: Optional original filename of the upload
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if upload_id:
        extra["upload_id"] = upload_id
    if original_filename:
        extra["original_filename"] = original_filename
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


def _log_error(logger: logging.Logger, message: str, extra: Dict[str, Any], include_traceback: bool):
    """Log at ERROR level, attaching the active exception when asked to."""
    if include_traceback and sys.exc_info()[0] is not None:
        logger.error(message, extra=extra, exc_info=sys.exc_info())
    else:
        logger.error(message, extra=extra)


# Photo event functions

def log_photo_received(
    logger: logging.Logger,
    upload_id: str,
    original_filename: Optional[str] = None,
    size_bytes: Optional[int] = None,
    content_type: Optional[str] = None,
    **kwargs
):
    """
    Log a photo staged to local storage.

    Args:
        logger: Logger instance
        upload_id: Upload ID (required)
        original_filename: Original filename of the upload
        size_bytes: Size of the staged file
        content_type: MIME type announced by the client
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="photo_received",
        upload_id=upload_id,
        original_filename=original_filename,
        **kwargs
    )
    if size_bytes is not None:
        extra["size_bytes"] = size_bytes
    if content_type:
        extra["content_type"] = content_type

    logger.info(f"Photo received: {upload_id}", extra=extra)


def log_photo_uploaded(
    logger: logging.Logger,
    upload_id: str,
    photo_url: str,
    duration_ms: Optional[float] = None,
    original_filename: Optional[str] = None,
    **kwargs
):
    """
    Log a photo stored by the provider.

    Args:
        logger: Logger instance
        upload_id: Upload ID (required)
        photo_url: Secure URL returned by the provider (required)
        duration_ms: Optional duration in milliseconds
        original_filename: Original filename of the upload
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="photo_uploaded",
        upload_id=upload_id,
        original_filename=original_filename,
        duration_ms=duration_ms,
        photo_url=photo_url,
        **kwargs
    )

    logger.info(f"Photo uploaded: {photo_url}", extra=extra)


def log_photo_upload_failed(
    logger: logging.Logger,
    upload_id: str,
    error: str,
    duration_ms: Optional[float] = None,
    original_filename: Optional[str] = None,
    include_traceback: bool = True,
    **kwargs
):
    """
    Log a failed photo upload.

    Args:
        logger: Logger instance
        upload_id: Upload ID (required)
        error: Error message (required, never sent to the client)
        duration_ms: Optional duration in milliseconds
        original_filename: Original filename of the upload
        include_traceback: Whether to include stack trace (default: True for errors)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="photo_upload_failed",
        upload_id=upload_id,
        original_filename=original_filename,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )

    _log_error(logger, f"Photo upload failed: {upload_id} - {error}", extra, include_traceback)


def log_temp_file_removed(
    logger: logging.Logger,
    path: str,
    upload_id: Optional[str] = None,
    **kwargs
):
    """
    Log removal of a staged upload file.

    Args:
        logger: Logger instance
        path: Local path that was removed (required)
        upload_id: Optional upload ID
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="temp_file_removed",
        upload_id=upload_id,
        path=path,
        **kwargs
    )

    logger.debug(f"Temporary file removed: {path}", extra=extra)


# Provider event functions

def log_provider_request(
    logger: logging.Logger,
    provider: str,
    operation: str,
    duration_ms: Optional[float] = None,
    upload_id: Optional[str] = None,
    **kwargs
):
    """
    Log storage provider request event.

    Args:
        logger: Logger instance
        provider: Provider name (cloudinary) (required)
        operation: Operation name (upload) (required)
        duration_ms: Optional duration in milliseconds
        upload_id: Optional upload ID
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="provider_request",
        upload_id=upload_id,
        duration_ms=duration_ms,
        provider=provider,
        operation=operation,
        **kwargs
    )

    logger.info(f"Provider request: {provider}.{operation}", extra=extra)


def log_provider_failure(
    logger: logging.Logger,
    provider: str,
    operation: str,
    error: str,
    duration_ms: Optional[float] = None,
    upload_id: Optional[str] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log storage provider failure event.

    Args:
        logger: Logger instance
        provider: Provider name (required)
        operation: Operation name (required)
        error: Error message (required)
        duration_ms: Optional duration in milliseconds
        upload_id: Optional upload ID
        include_traceback: Whether to include stack trace (default: False for provider failures)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="provider_failure",
        upload_id=upload_id,
        duration_ms=duration_ms,
        provider=provider,
        operation=operation,
        error=str(error),
        **kwargs
    )

    _log_error(logger, f"Provider failure: {provider}.{operation} - {error}", extra, include_traceback)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
