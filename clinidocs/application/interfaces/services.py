"""Service interfaces (ports) for the application layer.

Protocols for the two external collaborators: the blob store holding
uploaded bytes and the AI service that validates stored documents.
"""

from __future__ import annotations

from typing import Protocol

from clinidocs.domain.entities import AIFindings
from clinidocs.domain.enums import DocumentType


class IBlobStore(Protocol):
    """Protocol for blob storage backends (memory, local filesystem, S3).

    Every failure surfaces as a StorageException subclass.
    """

    async def put(
        self,
        storage_ref: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Store bytes under storage_ref and return the BlobRef to read them back."""

    async def get(self, blob_ref: str) -> bytes:
        """Return stored bytes. Raises StorageNotFoundError if missing."""

    async def delete(self, blob_ref: str) -> bool:
        """Delete bytes. Returns True if deleted, False if not found."""


class IValidationService(Protocol):
    """Protocol for the external AI validation service.

    Treated as a black box; its match flags are trusted inputs.
    """

    async def validate(self, blob_ref: str, document_type: DocumentType) -> AIFindings:
        """Inspect a stored document. Raises ValidationServiceFailure on error."""
