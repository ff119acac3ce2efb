"""Document API: thin routes delegating to DocumentUploadPipeline and DocumentQueryService."""

import mimetypes
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Request, Response, UploadFile

from clinidocs.api.v1.dependencies import (
    get_document_query_service,
    get_upload_pipeline,
)
from clinidocs.api.v1.endpoints._forms import parse_tags, read_upload
from clinidocs.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadPipeline,
)
from clinidocs.core.limiter import limit_upload, limit_writes
from clinidocs.schemas.document import (
    DocumentResponse,
    DocumentUpdate,
    DocumentVersionResponse,
)

router = APIRouter()


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """Get a document with its current status and findings."""
    return DocumentResponse.from_entity(await query_svc.get(document_id))


@router.patch("/{document_id}", response_model=DocumentResponse)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentUpdate,
    pipeline: DocumentUploadPipeline = Depends(get_upload_pipeline),
):
    """Edit title, type or tags. Omitted fields are left unchanged."""
    document = await pipeline.edit(
        document_id,
        title=body.title,
        type=body.type,
        tags=body.tags,
    )
    return DocumentResponse.from_entity(document)


@router.delete("/{document_id}", status_code=204)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    pipeline: DocumentUploadPipeline = Depends(get_upload_pipeline),
):
    """Delete a document, all its versions and their stored files."""
    await pipeline.delete(document_id)
    return Response(status_code=204)


@router.post(
    "/{document_id}/versions",
    response_model=DocumentVersionResponse,
    status_code=201,
)
@limit_upload
async def add_document_version(
    request: Request,
    document_id: str,
    file: Annotated[UploadFile, File(...)],
    uploaded_by: Annotated[str, Form()] = "",
    title: Annotated[str | None, Form()] = None,
    type: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form()] = None,
    pipeline: DocumentUploadPipeline = Depends(get_upload_pipeline),
):
    """Upload a new version; the document goes back to processing.

    title, type and tags are optional and change together with the new version.
    """
    upload = await read_upload(file)
    version = await pipeline.add_version(
        document_id,
        upload,
        uploaded_by,
        title=title,
        type=type,
        tags=parse_tags(tags) if tags is not None else None,
    )
    return DocumentVersionResponse.from_entity(version)


@router.get(
    "/{document_id}/versions",
    response_model=list[DocumentVersionResponse],
)
async def list_document_versions(
    document_id: str,
    pipeline: DocumentUploadPipeline = Depends(get_upload_pipeline),
):
    """List versions, oldest first."""
    versions = await pipeline.get_versions(document_id)
    return [DocumentVersionResponse.from_entity(v) for v in versions]


@router.get("/{document_id}/versions/{version}/content")
async def download_document_version(
    document_id: str,
    version: Annotated[int, Path(ge=1)],
    pipeline: DocumentUploadPipeline = Depends(get_upload_pipeline),
):
    """Download the stored bytes of one version."""
    found, content = await pipeline.get_version_content(document_id, version)
    media_type = mimetypes.guess_type(found.filename)[0] or "application/octet-stream"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{found.filename}"'},
    )
