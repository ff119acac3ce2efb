"""In-memory document store: document id -> Document snapshot.

Single source of truth for documents. Every write goes through update()
(or create/delete) under a per-document asyncio.Lock, applies typed
mutations to a frozen snapshot and swaps the result in, so readers never
observe a half-applied change. Reads take no lock. Writes to different
documents never wait on each other.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from clinidocs.domain.entities import Document, Version, VersionDraft
from clinidocs.domain.mutations import AppendVersion, DocumentMutation, apply_mutation
from clinidocs.infrastructure.persistence.version_ledger import VersionLedger
from clinidocs.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Document store backed by a dict, with the version ledger it owns."""

    def __init__(self, ledger: VersionLedger | None = None) -> None:
        self._documents: dict[str, Document] = {}
        self._ledger = ledger or VersionLedger()
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, document_id: str) -> asyncio.Lock:
        lock = self._locks.get(document_id)
        if lock is None:
            lock = self._locks[document_id] = asyncio.Lock()
        return lock

    def _apply(self, snapshot: Document, mutations: tuple[DocumentMutation, ...]) -> Document:
        """Apply mutations in order. Caller holds the document's lock."""
        now = utc_now()
        for mutation in mutations:
            appended: Version | None = None
            if isinstance(mutation, AppendVersion):
                appended = self._ledger.append(
                    snapshot.id,
                    mutation.draft,
                    expected_number=snapshot.current_version + 1,
                )
            snapshot = apply_mutation(snapshot, mutation, now, appended=appended)
        return snapshot

    async def create(self, document: Document, first_version: VersionDraft) -> Document:
        """Store a new document and attach first_version as version 1."""
        async with self._lock_for(document.id):
            if document.id in self._documents:
                raise ValueError(f"Document already exists: {document.id}")
            self._ledger.open(document.id)
            stored = self._apply(
                replace(document, versions=()), (AppendVersion(first_version),)
            )
            self._documents[document.id] = stored
        logger.debug("Stored document %s for patient %s", stored.id, stored.patient_id)
        return stored

    async def get(self, document_id: str) -> Document | None:
        return self._documents.get(document_id)

    async def update(
        self, document_id: str, *mutations: DocumentMutation
    ) -> Document | None:
        """Apply mutations atomically. Returns the new snapshot, or None if unknown."""
        if document_id not in self._documents:
            return None
        async with self._lock_for(document_id):
            current = self._documents.get(document_id)
            if current is None:
                return None
            updated = self._apply(current, mutations)
            if updated is not current:
                self._documents[document_id] = updated
            return updated

    async def delete(self, document_id: str) -> Document | None:
        """Remove a document and discard its versions. Returns the removed snapshot."""
        if document_id not in self._documents:
            return None
        async with self._lock_for(document_id):
            removed = self._documents.pop(document_id, None)
            if removed is None:
                return None
            self._ledger.discard(document_id)
        self._locks.pop(document_id, None)
        return removed

    async def list_for_patient(self, patient_id: str) -> list[Document]:
        return [d for d in list(self._documents.values()) if d.patient_id == patient_id]

    async def list_versions(self, document_id: str) -> list[Version] | None:
        if document_id not in self._documents:
            return None
        return self._ledger.list(document_id)
