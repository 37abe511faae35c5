"""
Exception taxonomy for the photo relay.

Every PhotoRelayError carries the HTTP status and the public message
rendered to the client as {"error": message}. Diagnostic detail stays
in the logs.
"""
from typing import Optional

MISSING_PHOTO_MESSAGE = "Aucun fichier photo n'a été reçu."
UPLOAD_FAILED_MESSAGE = "Erreur interne lors de l'envoi de la photo."
PHOTO_TOO_LARGE_MESSAGE = "Le fichier photo dépasse la taille maximale autorisée."


class PhotoRelayError(Exception):
    """Base error with an HTTP status and a client-safe message."""

    status_code = 500
    message = UPLOAD_FAILED_MESSAGE

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class MissingPhotoError(PhotoRelayError):
    """No file was attached under the photo field."""

    status_code = 400
    message = MISSING_PHOTO_MESSAGE


class PhotoTooLargeError(PhotoRelayError):
    """Uploaded part exceeds the configured size limit."""

    status_code = 413
    message = PHOTO_TOO_LARGE_MESSAGE


class StorageUploadError(PhotoRelayError):
    """
    Remote storage provider failed to accept the file.

    The wrapped provider error is kept as `detail` for logging only;
    the client always sees the generic upload failure message.
    """

    status_code = 500
    message = UPLOAD_FAILED_MESSAGE

    def __init__(self, detail: str, provider: Optional[str] = None):
        self.detail = detail
        self.provider = provider
        super().__init__()

    def __str__(self) -> str:
        return self.detail
