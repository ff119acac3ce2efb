"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implements (DIP).
"""

from __future__ import annotations

from typing import Protocol

from clinidocs.domain.entities import Document, Version, VersionDraft
from clinidocs.domain.mutations import DocumentMutation


class IDocumentStore(Protocol):
    """Protocol for the document store (single source of truth for documents).

    Writes are serialized per document id; readers always get whole snapshots.
    """

    async def create(self, document: Document, first_version: VersionDraft) -> Document:
        """Store a new document with its version 1. Returns the stored snapshot."""

    async def get(self, document_id: str) -> Document | None:
        """Return the current snapshot, or None if unknown."""

    async def update(
        self, document_id: str, *mutations: DocumentMutation
    ) -> Document | None:
        """Apply mutations atomically under the document's lock. None if unknown."""

    async def delete(self, document_id: str) -> Document | None:
        """Remove document and all versions. Returns the removed snapshot, or None if unknown."""

    async def list_for_patient(self, patient_id: str) -> list[Document]:
        """Return snapshots of all documents for a patient."""

    async def list_versions(self, document_id: str) -> list[Version] | None:
        """Return versions ascending, or None if the document is unknown."""
