"""Document dependencies (composition root).

The pipeline and query service are built once in the app lifespan and
stored on app.state; routes only see them through these providers.
"""

from __future__ import annotations

from fastapi import Request

from clinidocs.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadPipeline,
)


def get_upload_pipeline(request: Request) -> DocumentUploadPipeline:
    """Return the app-wide DocumentUploadPipeline."""
    return request.app.state.upload_pipeline


def get_document_query_service(request: Request) -> DocumentQueryService:
    """Return the app-wide DocumentQueryService (reads the pipeline's store)."""
    return request.app.state.document_query
