"""Presentation-layer dependency injection.

Routes depend only on these providers, not on infrastructure directly.
"""

from clinidocs.api.v1.dependencies.document import (
    get_document_query_service,
    get_upload_pipeline,
)

__all__ = [
    "get_document_query_service",
    "get_upload_pipeline",
]
