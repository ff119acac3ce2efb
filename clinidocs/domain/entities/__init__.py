"""Domain entities (frozen snapshots, no persistence concerns)."""

from clinidocs.domain.entities.document import (
    AIFindings,
    Document,
    Version,
    VersionDraft,
)

__all__ = [
    "AIFindings",
    "Document",
    "Version",
    "VersionDraft",
]
