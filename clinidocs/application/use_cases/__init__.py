"""Application use cases: one entry point per workflow."""

from clinidocs.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadPipeline,
)

__all__ = [
    "DocumentQueryService",
    "DocumentUploadPipeline",
]
