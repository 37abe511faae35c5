"""
Test configuration and fixtures.
Storage is replaced by an in-memory fake provider; staged files go to tmp_path.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"

import asyncio
import pytest
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.config import Settings
from app.schemas.upload import UploadOptions, UploadResult
from app.storage.base import StorageProvider


class FakeStorageProvider(StorageProvider):
    """In-memory provider recording every upload it receives."""

    name = "fake"

    def __init__(
        self,
        base_url: str = "https://res.example.com",
        error: Optional[Exception] = None,
        delay: float = 0,
        configured: bool = True,
        delete_before_failing: bool = False
    ):
        self.base_url = base_url
        self.error = error
        self.delay = delay
        self.configured = configured
        self.delete_before_failing = delete_before_failing
        self.calls: List[dict] = []

    async def upload(self, file_path: str, options: UploadOptions) -> UploadResult:
        existed = os.path.exists(file_path)
        with open(file_path, "rb") as f:
            content = f.read()
        self.calls.append({
            "file_path": file_path,
            "options": options,
            "existed": existed,
            "content": content,
        })

        if self.delay:
            await asyncio.sleep(self.delay)

        if self.error is not None:
            if self.delete_before_failing:
                os.remove(file_path)
            raise self.error

        return UploadResult(
            secure_url=f"{self.base_url}/{options.folder}/{options.filename}",
            public_id=f"{options.folder}/{options.filename}",
            bytes=len(content),
        )

    def is_configured(self) -> bool:
        return self.configured


@pytest.fixture
def upload_dir(tmp_path) -> str:
    """Directory receiving staged uploads."""
    return str(tmp_path / "uploads")


@pytest.fixture
def test_settings(upload_dir: str) -> Settings:
    """Settings pointing staging at tmp_path."""
    return Settings(
        upload_dir=upload_dir,
        cloudinary_folder="photos-app-levig",
        environment="test",
    )


@pytest.fixture
def fake_provider() -> FakeStorageProvider:
    """Provider that succeeds."""
    return FakeStorageProvider()


def get_test_app(provider: StorageProvider, app_settings: Settings) -> FastAPI:
    """Return the app with provider and settings dependencies overridden."""
    from app.main import app
    from app.config import get_settings
    from app.storage.factory import get_storage_provider

    app.dependency_overrides[get_storage_provider] = lambda: provider
    app.dependency_overrides[get_settings] = lambda: app_settings

    return app


def staged_files(upload_dir: str) -> List[str]:
    """Files currently left in the upload directory."""
    if not os.path.isdir(upload_dir):
        return []
    return os.listdir(upload_dir)


@pytest.fixture
async def make_client(test_settings: Settings):
    """Factory for HTTP clients bound to a given provider."""
    apps = []

    def _make(provider: StorageProvider, app_settings: Optional[Settings] = None) -> AsyncClient:
        app = get_test_app(provider, app_settings or test_settings)
        apps.append(app)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    yield _make

    for app in apps:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(
    make_client,
    fake_provider: FakeStorageProvider
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    async with make_client(fake_provider) as ac:
        yield ac
