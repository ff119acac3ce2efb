"""Application DTOs (input/filter shapes for use cases)."""

from clinidocs.application.dtos.document import (
    DocumentFilter,
    DocumentMetadataInput,
    DocumentPage,
    FileUpload,
)

__all__ = [
    "DocumentFilter",
    "DocumentMetadataInput",
    "DocumentPage",
    "FileUpload",
]
