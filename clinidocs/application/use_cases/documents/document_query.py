"""Document query: per-patient filtering and single-document lookup (read-only)."""

from __future__ import annotations

from datetime import datetime

from clinidocs.application.dtos.document import DocumentFilter, DocumentPage
from clinidocs.application.interfaces.repositories import IDocumentStore
from clinidocs.domain.entities import Document
from clinidocs.domain.enums import DocumentStatus, DocumentType
from clinidocs.domain.exceptions import ResourceNotFoundException, ValidationException
from clinidocs.shared.utils.datetime import ensure_utc, lower_bound, upper_bound

DEFAULT_PAGE_SIZE = 10

# Filter values that mean "no constraint" for type and status.
ANY_VALUES = frozenset({"", "any", "all"})


def _coerce_option(enum_cls, raw, field: str):
    if raw is None or (isinstance(raw, str) and raw.strip().lower() in ANY_VALUES):
        return None
    try:
        return enum_cls.parse(raw)
    except ValueError as e:
        raise ValidationException(str(e), field=field) from e


class DocumentQueryService:
    """Single responsibility: read documents from the store. Never mutates."""

    def __init__(self, store: IDocumentStore) -> None:
        self.store = store

    async def get(self, document_id: str) -> Document:
        document = await self.store.get(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def query(
        self, patient_id: str, filters: DocumentFilter | None = None
    ) -> list[Document]:
        """Return a patient's documents matching every given option, newest first.

        Args:
            patient_id: Patient whose documents are searched.
            filters: Optional constraints; absent options match everything.
                search_term matches a case-insensitive substring of the title
                or of any tag.

        Raises:
            ValidationException: Unknown type/status value or date_from after date_to.
        """
        f = filters or DocumentFilter()
        doc_type: DocumentType | None = _coerce_option(DocumentType, f.type, "type")
        status: DocumentStatus | None = _coerce_option(DocumentStatus, f.status, "status")
        start: datetime | None = lower_bound(f.date_from) if f.date_from else None
        end: datetime | None = upper_bound(f.date_to) if f.date_to else None
        if start and end and start > end:
            raise ValidationException("date_from must not be after date_to", field="date_from")
        term = (f.search_term or "").strip().lower()

        def matches(doc: Document) -> bool:
            if doc_type is not None and doc.type is not doc_type:
                return False
            if status is not None and doc.status is not status:
                return False
            uploaded = ensure_utc(doc.upload_date)
            if start is not None and uploaded < start:
                return False
            if end is not None and uploaded > end:
                return False
            if term and term not in doc.title.lower() and not doc.tags.contains_substring(term):
                return False
            return True

        documents = await self.store.list_for_patient(patient_id)
        results = [d for d in documents if matches(d)]
        results.sort(key=lambda d: (d.upload_date, d.created_at), reverse=True)
        return results

    async def query_page(
        self,
        patient_id: str,
        filters: DocumentFilter | None = None,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> DocumentPage:
        """Return one page of query() results. A page past the end is empty.

        Raises:
            ValidationException: page or limit below 1, or any query() error.
        """
        if page < 1:
            raise ValidationException("page must be at least 1", field="page")
        if limit < 1:
            raise ValidationException("limit must be at least 1", field="limit")
        results = await self.query(patient_id, filters)
        start = (page - 1) * limit
        return DocumentPage(
            documents=results[start : start + limit],
            total=len(results),
            page=page,
            limit=limit,
        )
