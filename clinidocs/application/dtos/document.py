"""DTOs for document use cases (no dependency on the API layer)."""

from collections.abc import Sequence
import math
from dataclasses import dataclass, field
from datetime import date, datetime

from clinidocs.domain.entities import Document
from clinidocs.domain.enums import DocumentStatus, DocumentType


@dataclass(frozen=True)
class DocumentMetadataInput:
    """Caller-supplied metadata for submit / add_version.

    title is required for submit. uploaded_by may be empty. type is accepted as a raw string so the pipeline can reject
    unknown values with InvalidInput.
    """

    title: str
    type: DocumentType | str
    uploaded_by: str = ""
    tags: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class FileUpload:
    """Uploaded file bytes plus the client-supplied name."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class DocumentFilter:
    """Query options. None (or 'any'/'all' for type and status) means no constraint.

    date_from/date_to are inclusive bounds on upload_date. A plain date bound
    covers the whole day.
    """

    type: DocumentType | str | None = None
    status: DocumentStatus | str | None = None
    date_from: date | datetime | None = None
    date_to: date | datetime | None = None
    search_term: str | None = None


@dataclass(frozen=True)
class DocumentPage:
    """One page of a query result plus the size of the whole result."""

    documents: list[Document]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
