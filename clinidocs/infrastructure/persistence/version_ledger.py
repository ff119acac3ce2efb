"""Version ledger: per-document, append-only, gapless version lists.

Owned by the document store, which calls append() while holding the
document's lock. Numbers are always current_max + 1; there is no edit or
reorder operation.
"""

from __future__ import annotations

from clinidocs.domain.entities import Version, VersionDraft
from clinidocs.domain.exceptions import (
    DocumentVersionConflictException,
    ResourceNotFoundException,
)


class VersionLedger:
    """In-memory version ledger keyed by document id."""

    def __init__(self) -> None:
        self._versions: dict[str, list[Version]] = {}

    def open(self, document_id: str) -> None:
        """Start an empty ledger for a new document. No-op if it already exists."""
        self._versions.setdefault(document_id, [])

    def append(
        self,
        document_id: str,
        draft: VersionDraft,
        expected_number: int | None = None,
    ) -> Version:
        """Number draft as current_max + 1 and append it.

        Args:
            document_id: Parent document.
            draft: Version fields without a number.
            expected_number: Number the caller believes comes next; a mismatch
                means another append got in first.

        Raises:
            ResourceNotFoundException: No ledger for document_id.
            DocumentVersionConflictException: expected_number is stale.
        """
        versions = self._versions.get(document_id)
        if versions is None:
            raise ResourceNotFoundException("document", document_id)
        next_number = versions[-1].version + 1 if versions else 1
        if expected_number is not None and expected_number != next_number:
            raise DocumentVersionConflictException(
                document_id, expected=expected_number, actual=next_number
            )
        version = Version(
            id=draft.id,
            document_id=document_id,
            version=next_number,
            upload_date=draft.upload_date,
            uploaded_by=draft.uploaded_by,
            blob_ref=draft.blob_ref,
            filename=draft.filename,
            file_size=draft.file_size,
            checksum=draft.checksum,
        )
        versions.append(version)
        return version

    def list(self, document_id: str) -> list[Version]:
        """Return versions ascending (newest last). Raises if the document is unknown."""
        versions = self._versions.get(document_id)
        if versions is None:
            raise ResourceNotFoundException("document", document_id)
        return list(versions)

    def discard(self, document_id: str) -> list[Version]:
        """Drop all versions of a document; returns what was dropped."""
        return self._versions.pop(document_id, [])

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._versions
