"""Typed document mutations.

Every change to a stored Document is one of these variants. The document
store applies them under the per-document lock via apply_mutation(), which
dispatches exhaustively: an unknown variant is a programming error.

Version-scoped mutations (MarkStored, ApplyFindings, RecordFailure) are
no-ops once their version is no longer current, so a late result for a
superseded upload never overwrites the state of a newer one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from clinidocs.domain.entities import AIFindings, Document, Version, VersionDraft
from clinidocs.domain.enums import DocumentStatus, DocumentType, StatusReason
from clinidocs.domain.value_objects import DocumentTags


@dataclass(frozen=True)
class SetProcessing:
    """Reset validation state: status PROCESSING, no findings, no reason."""


@dataclass(frozen=True)
class AppendVersion:
    """Append a new current version. The store numbers the draft through the ledger."""

    draft: VersionDraft


@dataclass(frozen=True)
class MarkStored:
    """Record that the bytes of the given version are in the blob store."""

    version: int
    blob_ref: str


@dataclass(frozen=True)
class ApplyFindings:
    """Commit an interpreted validation result for the given version."""

    version: int
    status: DocumentStatus
    reason: StatusReason | None
    findings: AIFindings


@dataclass(frozen=True)
class RecordFailure:
    """Commit an infrastructure failure (storage or validation service) for a version."""

    version: int
    reason: StatusReason
    error: str


@dataclass(frozen=True)
class EditMetadata:
    """Explicit caller edit; None leaves a field unchanged."""

    title: str | None = None
    type: DocumentType | None = None
    tags: DocumentTags | None = None


DocumentMutation = (
    SetProcessing | AppendVersion | MarkStored | ApplyFindings | RecordFailure | EditMetadata
)


def apply_mutation(
    document: Document,
    mutation: DocumentMutation,
    now: datetime,
    *,
    appended: Version | None = None,
) -> Document:
    """Return a new snapshot with mutation applied (document itself is untouched).

    appended is the ledger-numbered Version and is required for AppendVersion.
    """
    if isinstance(mutation, SetProcessing):
        return replace(
            document,
            status=DocumentStatus.PROCESSING,
            status_reason=None,
            ai_processed=False,
            ai_findings=None,
            updated_at=now,
        )

    if isinstance(mutation, AppendVersion):
        if appended is None or appended.id != mutation.draft.id:
            raise ValueError("AppendVersion requires the version numbered from its draft")
        v = appended
        if v.version != document.current_version + 1:
            raise ValueError(
                f"version {v.version} does not follow {document.current_version} "
                f"for document {document.id}"
            )
        return replace(
            document,
            versions=document.versions + (v,),
            upload_date=v.upload_date,
            uploaded_by=v.uploaded_by,
            blob_ref=None,
            updated_at=now,
        )

    if isinstance(mutation, MarkStored):
        if not document.is_current(mutation.version):
            return document
        return replace(document, blob_ref=mutation.blob_ref, updated_at=now)

    if isinstance(mutation, ApplyFindings):
        if not document.is_current(mutation.version):
            return document
        return replace(
            document,
            status=mutation.status,
            status_reason=mutation.reason,
            ai_processed=True,
            ai_findings=mutation.findings,
            updated_at=now,
        )

    if isinstance(mutation, RecordFailure):
        if not document.is_current(mutation.version):
            return document
        if mutation.reason is StatusReason.STORAGE_FAILURE:
            # Nothing was ever sent for validation: no findings to show.
            return replace(
                document,
                status=DocumentStatus.ERROR,
                status_reason=mutation.reason,
                ai_processed=False,
                ai_findings=None,
                updated_at=now,
            )
        if mutation.reason is StatusReason.VALIDATION_SERVICE_FAILURE:
            return replace(
                document,
                status=DocumentStatus.ERROR,
                status_reason=mutation.reason,
                ai_processed=True,
                ai_findings=AIFindings.unavailable(mutation.error),
                updated_at=now,
            )
        raise ValueError(f"{mutation.reason.value} is not an infrastructure failure")

    if isinstance(mutation, EditMetadata):
        return replace(
            document,
            title=mutation.title if mutation.title is not None else document.title,
            type=mutation.type if mutation.type is not None else document.type,
            tags=mutation.tags if mutation.tags is not None else document.tags,
            updated_at=now,
        )

    raise TypeError(f"Unsupported document mutation: {type(mutation).__name__}")
