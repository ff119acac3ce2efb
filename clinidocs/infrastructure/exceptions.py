"""Infrastructure exceptions for blob storage.

Storage errors extend the domain StorageException so presentation can map them
to HTTP responses consistently, and so the upload pipeline can fold any of
them into a storage_failure status with one except clause.
"""

from clinidocs.domain.exceptions import StorageException

__all__ = [
    "StorageException",
    "StorageNotFoundError",
    "StorageUploadError",
    "StorageDownloadError",
    "StorageDeleteError",
    "StoragePermissionError",
]


class StorageNotFoundError(StorageException):
    """Blob not found in storage."""

    def __init__(self, blob_ref: str) -> None:
        super().__init__(
            f"Blob not found: {blob_ref}",
            "STORAGE_NOT_FOUND",
            {"blob_ref": blob_ref},
        )


class StorageUploadError(StorageException):
    """Blob write failed."""

    def __init__(self, blob_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to store blob: {blob_ref}",
            "STORAGE_UPLOAD_ERROR",
            {"blob_ref": blob_ref, "reason": reason},
        )


class StorageDownloadError(StorageException):
    """Blob read failed."""

    def __init__(self, blob_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to read blob: {blob_ref}",
            "STORAGE_DOWNLOAD_ERROR",
            {"blob_ref": blob_ref, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Blob deletion failed."""

    def __init__(self, blob_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete blob: {blob_ref}",
            "STORAGE_DELETE_ERROR",
            {"blob_ref": blob_ref, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Storage ref escapes the storage root or is otherwise not allowed."""

    def __init__(self, blob_ref: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {blob_ref}",
            "STORAGE_PERMISSION_ERROR",
            {"blob_ref": blob_ref, "operation": operation},
        )
