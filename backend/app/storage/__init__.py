"""
Storage module for relaying photos to remote object storage (Cloudinary).

Uploaded parts are staged on local disk, sent to the provider by path,
and removed once the provider call returns.
"""
from app.storage.base import StorageProvider
from app.storage.cloudinary_client import CloudinaryProvider
from app.storage.factory import build_storage_provider, get_storage_provider
from app.storage.temp_files import StagedFile, remove_if_exists, stage_upload, staged_upload

__all__ = [
    "StorageProvider",
    "CloudinaryProvider",
    "build_storage_provider",
    "get_storage_provider",
    "StagedFile",
    "remove_if_exists",
    "stage_upload",
    "staged_upload",
]
