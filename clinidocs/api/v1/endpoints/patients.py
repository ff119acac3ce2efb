"""Patient-scoped document routes: submit and query."""

from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from clinidocs.api.v1.dependencies import (
    get_document_query_service,
    get_upload_pipeline,
)
from clinidocs.api.v1.endpoints._forms import parse_tags, read_upload
from clinidocs.application.dtos.document import DocumentFilter, DocumentMetadataInput
from clinidocs.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadPipeline,
)
from clinidocs.core.limiter import limit_upload
from clinidocs.application.use_cases.documents.document_query import DEFAULT_PAGE_SIZE
from clinidocs.schemas.document import DocumentListResponse, DocumentResponse

router = APIRouter()


@router.post(
    "/{patient_id}/documents",
    response_model=DocumentResponse,
    status_code=201,
)
@limit_upload
async def submit_document(
    request: Request,
    patient_id: str,
    title: Annotated[str, Form(...)],
    type: Annotated[str, Form(...)],
    file: Annotated[UploadFile, File(...)],
    uploaded_by: Annotated[str, Form()] = "",
    tags: Annotated[str | None, Form()] = None,
    pipeline: DocumentUploadPipeline = Depends(get_upload_pipeline),
):
    """Submit a document for a patient. Returns at once with status processing."""
    upload = await read_upload(file)
    document = await pipeline.submit(
        patient_id,
        DocumentMetadataInput(
            title=title,
            type=type,
            uploaded_by=uploaded_by,
            tags=parse_tags(tags),
        ),
        upload,
    )
    return DocumentResponse.from_entity(document)


@router.get("/{patient_id}/documents", response_model=DocumentListResponse)
async def list_patient_documents(
    patient_id: str,
    type: str | None = Query(None, description="Document type, or 'all'"),
    status: str | None = Query(None, description="Document status, or 'all'"),
    date_from: date | datetime | None = Query(None),
    date_to: date | datetime | None = Query(None),
    search: str | None = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """List a patient's documents, newest first, one page at a time.

    All filters are optional and combined; pagination counts only matching documents.
    """
    result = await query_svc.query_page(
        patient_id,
        DocumentFilter(
            type=type,
            status=status,
            date_from=date_from,
            date_to=date_to,
            search_term=search,
        ),
        page=page,
        limit=limit,
    )
    return DocumentListResponse.from_page(result)
