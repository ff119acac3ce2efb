"""Document and Version domain entities.

Both are frozen: the document store replaces a snapshot instead of editing
it in place, so a reader holding a Document never sees a partial update.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from clinidocs.domain.enums import DocumentStatus, DocumentType, StatusReason
from clinidocs.domain.value_objects import DocumentTags, FileType


@dataclass(frozen=True)
class AIFindings:
    """Structured output of the AI validation pass.

    Match flags are None only on the "could not check" sentinel built by
    unavailable(); a real validation always reports both flags.
    """

    patient_name_match: bool | None
    patient_dob_match: bool | None
    scan_date_detected: date | None = None
    physician_detected: str | None = None
    key_findings: tuple[str, ...] = ()
    error: str | None = None

    @classmethod
    def unavailable(cls, error: str) -> AIFindings:
        """Sentinel findings for a validation pass that never produced a result."""
        return cls(
            patient_name_match=None,
            patient_dob_match=None,
            error=error,
        )

    @property
    def is_unavailable(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class VersionDraft:
    """A version before the ledger numbers it (id and blob_ref are pre-assigned)."""

    id: str
    upload_date: datetime
    uploaded_by: str
    blob_ref: str
    filename: str
    file_size: int
    checksum: str


@dataclass(frozen=True)
class Version:
    """One immutable snapshot of a document's bytes and who submitted it."""

    id: str
    document_id: str
    version: int
    upload_date: datetime
    uploaded_by: str
    blob_ref: str
    filename: str
    file_size: int
    checksum: str


@dataclass(frozen=True)
class Document:
    """A logical clinical artifact with one or more stored versions.

    Invariants (enforced by the typed mutations in clinidocs.domain.mutations):
    ai_findings is set iff ai_processed; PROCESSING implies not ai_processed;
    versions are numbered 1..N without gaps.
    """

    id: str
    patient_id: str
    title: str
    type: DocumentType
    file_type: FileType
    upload_date: datetime
    uploaded_by: str
    tags: DocumentTags
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
    ai_processed: bool = False
    ai_findings: AIFindings | None = None
    status_reason: StatusReason | None = None
    blob_ref: str | None = None
    versions: tuple[Version, ...] = field(default_factory=tuple)

    @property
    def current_version(self) -> int:
        """Number of the highest (current) version; 0 only before version 1 is attached."""
        return self.versions[-1].version if self.versions else 0

    @property
    def latest(self) -> Version | None:
        return self.versions[-1] if self.versions else None

    def is_current(self, version: int) -> bool:
        """Return whether the given version number is still the current one."""
        return self.current_version == version
