"""
Health check endpoint.
Verifies storage provider configuration and the local upload directory.
"""
import os
from fastapi import APIRouter, Depends, HTTPException

from app.config import Settings, get_settings
from app.storage.base import StorageProvider
from app.storage.factory import get_storage_provider

router = APIRouter()


@router.get("")
async def health_check(
    provider: StorageProvider = Depends(get_storage_provider),
    app_settings: Settings = Depends(get_settings)
):
    """
    Health check endpoint.
    Returns status of the storage provider and the upload directory.
    """
    health_status = {
        "status": "healthy",
        "storage": "unknown",
        "upload_dir": "unknown"
    }

    # Check storage provider credentials
    if provider.is_configured():
        health_status["storage"] = "configured"
    else:
        health_status["storage"] = f"error: {provider.name} not configured"
        health_status["status"] = "unhealthy"

    # Check upload directory can receive staged files
    try:
        os.makedirs(app_settings.upload_dir, exist_ok=True)
        if not os.access(app_settings.upload_dir, os.W_OK):
            raise PermissionError(f"{app_settings.upload_dir} is not writable")
        health_status["upload_dir"] = "writable"
    except OSError as e:
        health_status["upload_dir"] = f"error: {str(e)}"
        health_status["status"] = "unhealthy"

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
