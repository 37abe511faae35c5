"""
Base class for remote storage providers.
All providers must implement this interface so the upload route can relay
photos without knowing which backend stores them.
"""
from abc import ABC, abstractmethod

from app.schemas.upload import UploadOptions, UploadResult


class StorageProvider(ABC):
    """
    Abstract base class for storage providers.

    Providers are constructed explicitly from settings and injected into the
    upload route, so tests can substitute a fake implementation.

    All providers must implement:
    - upload(): Send a local file and return its public URL
    - is_configured(): Report whether credentials are present
    """

    name: str = "storage"

    @abstractmethod
    async def upload(self, file_path: str, options: UploadOptions) -> UploadResult:
        """
        Upload a local file to the provider.

        Args:
            file_path: Path of the staged file on local disk
            options: Folder and filename handling options

        Returns:
            UploadResult with at least the secure URL

        Raises:
            StorageUploadError: If the provider rejects the file or is unreachable
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Check if provider is properly configured (credentials present, etc.).

        Returns:
            True if provider can be used, False otherwise
        """
        pass
