"""Domain value objects for clinical documents.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class DocumentTags:
    """Value object for a document's tag set.

    Tags are stripped and lower-cased; empty strings are dropped and
    duplicates collapse. Stored sorted so equal sets compare and render equal.
    """

    values: tuple[str, ...] = ()

    @classmethod
    def from_iterable(cls, raw: Iterable[str] | None) -> "DocumentTags":
        """Normalize raw tag strings into a DocumentTags instance."""
        if not raw:
            return cls()
        normalized = {t.strip().lower() for t in raw if t and t.strip()}
        return cls(tuple(sorted(normalized)))

    def contains_substring(self, term: str) -> bool:
        """Return True if any tag contains term (term must already be lower-cased)."""
        return any(term in tag for tag in self.values)

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class FileType:
    """Value object for the file type derived from an uploaded file name.

    The lower-cased extension without the dot (e.g. 'pdf'); 'unknown' when
    the name has no extension.
    """

    UNKNOWN: ClassVar[str] = "unknown"

    value: str

    @classmethod
    def from_filename(cls, filename: str | None) -> "FileType":
        """Derive the file type from a file name. Never fails."""
        if not filename:
            return cls(cls.UNKNOWN)
        _, ext = os.path.splitext(os.path.basename(filename.strip()))
        ext = ext.lstrip(".").lower()
        return cls(ext or cls.UNKNOWN)

    def __str__(self) -> str:
        return self.value
