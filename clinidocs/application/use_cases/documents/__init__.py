"""Document use cases: upload pipeline (write) and query (read)."""

from clinidocs.application.use_cases.documents.document_query import (
    DocumentQueryService,
)
from clinidocs.application.use_cases.documents.upload_pipeline import (
    DocumentUploadPipeline,
)

__all__ = [
    "DocumentQueryService",
    "DocumentUploadPipeline",
]
