"""
Pydantic schemas for the photo upload relay.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class UploadOptions(BaseModel):
    """Options sent to the storage provider with every photo."""
    folder: str = Field(..., description="Logical folder in the provider account")
    use_filename: bool = True
    unique_filename: bool = False
    overwrite: bool = True
    filename: Optional[str] = Field(None, description="Original filename to preserve")


class UploadResult(BaseModel):
    """Asset description returned by the storage provider."""
    secure_url: str
    public_id: Optional[str] = None
    format: Optional[str] = None
    size_bytes: Optional[int] = Field(None, alias="bytes")
    width: Optional[int] = None
    height: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PhotoUploadResponse(BaseModel):
    """Schema for a successful upload response."""
    message: str
    photo_url: str = Field(..., alias="photoUrl")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "message": "Photo téléversée avec succès",
                "photoUrl": "https://res.cloudinary.com/demo/image/upload/photos-app-levig/cat.jpg"
            }
        }


class ErrorResponse(BaseModel):
    """Schema for every error response."""
    error: str
