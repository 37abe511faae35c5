"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Cloudinary storage provider
    # Credentials are passed explicitly to the provider, never set globally
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    cloudinary_folder: str = "photos-app-levig"  # Folder that groups uploaded photos
    cloudinary_timeout: Optional[float] = None  # Outbound upload timeout in seconds

    # Local staging of multipart uploads
    upload_dir: str = "uploads"
    max_upload_bytes: Optional[int] = None  # No limit unless configured

    # Server
    host: str = "0.0.0.0"
    port: int = 5000  # Hosting platforms set PORT, 5000 for local runs

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Settings dependency (overridable in tests)."""
    return settings
