"""
Storage provider factory.
Builds the provider from settings at startup and exposes it as a FastAPI
dependency, which tests replace through app.dependency_overrides.
"""
import logging

from fastapi import Depends, Request

from app.config import Settings, get_settings
from app.storage.base import StorageProvider
from app.storage.cloudinary_client import CloudinaryProvider

logger = logging.getLogger(__name__)


def build_storage_provider(app_settings: Settings) -> StorageProvider:
    """
    Construct the storage provider described by settings.

    Args:
        app_settings: Loaded application settings

    Returns:
        StorageProvider instance (may or may not be configured)
    """
    return CloudinaryProvider(
        cloud_name=app_settings.cloudinary_cloud_name,
        api_key=app_settings.cloudinary_api_key,
        api_secret=app_settings.cloudinary_api_secret,
        timeout=app_settings.cloudinary_timeout,
    )


def get_storage_provider(
    request: Request,
    app_settings: Settings = Depends(get_settings)
) -> StorageProvider:
    """
    Return the provider attached to the application at startup.

    Built lazily when the lifespan did not run (e.g. an ASGI transport
    without lifespan support).
    """
    provider = getattr(request.app.state, "storage_provider", None)
    if provider is None:
        logger.info("Storage provider not initialized at startup, building it now")
        provider = build_storage_provider(app_settings)
        request.app.state.storage_provider = provider
    return provider
