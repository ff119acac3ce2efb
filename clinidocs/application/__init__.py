"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (document store, blob store,
validation service).
"""

from clinidocs.application.interfaces import (
    IBlobStore,
    IDocumentStore,
    IValidationService,
)
from clinidocs.application.services import ValidationOutcome, interpret_findings
from clinidocs.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadPipeline,
)

__all__ = [
    "DocumentQueryService",
    "DocumentUploadPipeline",
    "IBlobStore",
    "IDocumentStore",
    "IValidationService",
    "ValidationOutcome",
    "interpret_findings",
]
