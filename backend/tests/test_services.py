"""
Tests for service layer business logic.
"""
import io
import os
import pytest

from starlette.datastructures import Headers, UploadFile

from app.errors import StorageUploadError
from app.services.photo_service import PhotoUploadService
from tests.conftest import FakeStorageProvider


def make_upload(content: bytes = b"photo-bytes", filename: str = "cat.jpg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": "image/jpeg"})
    )


class TestPhotoUploadService:
    """Tests for PhotoUploadService."""

    def test_build_options(self):
        """Test fixed upload options."""
        options = PhotoUploadService.build_options("photos-app-levig", "cat.jpg")

        assert options.folder == "photos-app-levig"
        assert options.use_filename is True
        assert options.unique_filename is False
        assert options.overwrite is True
        assert options.filename == "cat.jpg"

    @pytest.mark.asyncio
    async def test_relay_success(self, upload_dir: str):
        """Test relay returns provider result and removes the staged file."""
        provider = FakeStorageProvider()

        result = await PhotoUploadService.relay(
            make_upload(),
            provider,
            upload_dir=upload_dir,
            folder="photos-app-levig",
            upload_id="abc"
        )

        assert result.secure_url == "https://res.example.com/photos-app-levig/cat.jpg"
        assert provider.calls[0]["file_path"] == os.path.join(upload_dir, "abc.jpg")
        assert os.listdir(upload_dir) == []

    @pytest.mark.asyncio
    async def test_relay_failure_propagates(self, upload_dir: str):
        """Test provider errors propagate after cleanup."""
        provider = FakeStorageProvider(error=StorageUploadError("quota exceeded", provider="fake"))

        with pytest.raises(StorageUploadError):
            await PhotoUploadService.relay(
                make_upload(),
                provider,
                upload_dir=upload_dir,
                folder="photos-app-levig"
            )

        assert os.listdir(upload_dir) == []
