"""Domain value objects (immutable, self-validating)."""

from clinidocs.domain.value_objects.core import DocumentTags, FileType

__all__ = [
    "DocumentTags",
    "FileType",
]
