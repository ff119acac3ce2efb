"""Pydantic request/response schemas for the API."""

from clinidocs.schemas.document import (
    AIFindingsResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdate,
    DocumentVersionResponse,
    PaginationResponse,
)
from clinidocs.schemas.health import HealthResponse

__all__ = [
    "AIFindingsResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "DocumentUpdate",
    "DocumentVersionResponse",
    "HealthResponse",
    "PaginationResponse",
]
