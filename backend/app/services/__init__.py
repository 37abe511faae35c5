"""
Business logic services.
"""
from app.services.photo_service import PhotoUploadService

__all__ = [
    "PhotoUploadService",
]
