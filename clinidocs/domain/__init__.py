"""Domain layer: entities, value objects, enums, mutations, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from clinidocs.domain.entities import AIFindings, Document, Version, VersionDraft
from clinidocs.domain.enums import DocumentStatus, DocumentType, StatusReason
from clinidocs.domain.exceptions import (
    ClinidocsException,
    DocumentVersionConflictException,
    ResourceNotFoundException,
    StorageException,
    ValidationException,
    ValidationServiceFailure,
)
from clinidocs.domain.value_objects import DocumentTags, FileType

__all__ = [
    # Entities
    "AIFindings",
    "Document",
    "Version",
    "VersionDraft",
    # Enums
    "DocumentStatus",
    "DocumentType",
    "StatusReason",
    # Exceptions
    "ClinidocsException",
    "DocumentVersionConflictException",
    "ResourceNotFoundException",
    "StorageException",
    "ValidationException",
    "ValidationServiceFailure",
    # Value objects
    "DocumentTags",
    "FileType",
]
