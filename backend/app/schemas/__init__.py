"""
Pydantic schemas for API request/response validation.
"""
from app.schemas.upload import (
    UploadOptions,
    UploadResult,
    PhotoUploadResponse,
    ErrorResponse,
)

__all__ = [
    "UploadOptions",
    "UploadResult",
    "PhotoUploadResponse",
    "ErrorResponse",
]
