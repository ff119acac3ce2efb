"""Document API schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from clinidocs.application.dtos.document import DocumentPage
from clinidocs.domain.entities import AIFindings, Document, Version
from clinidocs.domain.enums import DocumentStatus, DocumentType, StatusReason


class AIFindingsResponse(BaseModel):
    """Findings of the validation pass; error is set only when it could not run."""

    patient_name_match: bool | None
    patient_dob_match: bool | None
    scan_date_detected: date | None = None
    physician_detected: str | None = None
    key_findings: list[str] = []
    error: str | None = None

    @classmethod
    def from_entity(cls, findings: AIFindings) -> AIFindingsResponse:
        return cls(
            patient_name_match=findings.patient_name_match,
            patient_dob_match=findings.patient_dob_match,
            scan_date_detected=findings.scan_date_detected,
            physician_detected=findings.physician_detected,
            key_findings=list(findings.key_findings),
            error=findings.error,
        )


class DocumentVersionResponse(BaseModel):
    """One version in a document's history."""

    id: str
    document_id: str
    version: int
    upload_date: datetime
    uploaded_by: str
    filename: str
    file_size: int
    checksum: str

    @classmethod
    def from_entity(cls, version: Version) -> DocumentVersionResponse:
        return cls(
            id=version.id,
            document_id=version.document_id,
            version=version.version,
            upload_date=version.upload_date,
            uploaded_by=version.uploaded_by,
            filename=version.filename,
            file_size=version.file_size,
            checksum=version.checksum,
        )


class DocumentResponse(BaseModel):
    """Document with its current validation state and version history."""

    id: str
    patient_id: str
    title: str
    type: DocumentType
    file_type: str
    upload_date: datetime
    uploaded_by: str
    tags: list[str]
    status: DocumentStatus
    status_reason: StatusReason | None = None
    ai_processed: bool
    ai_findings: AIFindingsResponse | None = None
    current_version: int
    versions: list[DocumentVersionResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, document: Document) -> DocumentResponse:
        return cls(
            id=document.id,
            patient_id=document.patient_id,
            title=document.title,
            type=document.type,
            file_type=str(document.file_type),
            upload_date=document.upload_date,
            uploaded_by=document.uploaded_by,
            tags=list(document.tags),
            status=document.status,
            status_reason=document.status_reason,
            ai_processed=document.ai_processed,
            ai_findings=(
                AIFindingsResponse.from_entity(document.ai_findings)
                if document.ai_findings is not None
                else None
            ),
            current_version=document.current_version,
            versions=[DocumentVersionResponse.from_entity(v) for v in document.versions],
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class PaginationResponse(BaseModel):
    """Position of a page within the full filtered result."""

    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class DocumentListResponse(BaseModel):
    """One page of a patient's documents."""

    documents: list[DocumentResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: DocumentPage) -> DocumentListResponse:
        return cls(
            documents=[DocumentResponse.from_entity(d) for d in page.documents],
            pagination=PaginationResponse(
                total=page.total,
                page=page.page,
                limit=page.limit,
                total_pages=page.total_pages,
                has_next=page.has_next,
                has_prev=page.has_prev,
            ),
        )

class DocumentUpdate(BaseModel):
    """Request body for PATCH document (partial; omitted fields unchanged)."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    type: DocumentType | None = None
    tags: list[str] | None = Field(default=None, max_length=50)
