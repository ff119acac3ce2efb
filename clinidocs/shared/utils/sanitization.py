"""Input sanitization for values that end up in storage paths or UI text."""

import html
import os
import re
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize caller inputs before they are stored.

    Titles and tags are rendered by clients, so markup is stripped; patient
    ids and file names become part of blob storage refs, so they are checked
    for path characters.
    """

    IDENTIFIER_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9_.-]+$")
    # Device names that some filesystems refuse regardless of extension.
    RESERVED_FILENAMES: ClassVar[frozenset[str]] = frozenset(
        {"con", "prn", "aux", "nul"}
        | {f"com{i}" for i in range(1, 10)}
        | {f"lpt{i}" for i in range(1, 10)}
    )

    @classmethod
    def sanitize_text(cls, value: str) -> str:
        """Remove all HTML tags with nh3 and trim whitespace.

        nh3 escapes what it keeps; entities are decoded again so the result
        is plain text ("Labs & imaging" stays as typed).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Plain text without markup.
        """
        if not value:
            return value
        return html.unescape(nh3.clean(value, tags=set(), attributes={})).strip()

    @classmethod
    def sanitize_identifier(cls, value: str) -> str:
        """Validate an identifier used in storage refs (alphanumeric, '_', '-', '.').

        Raises:
            ValueError: If the format is invalid.
        """
        value = (value or "").strip()
        if not value or value in {".", ".."} or not cls.IDENTIFIER_PATTERN.match(value):
            raise ValueError("Invalid identifier format")
        return value

    @classmethod
    def sanitize_filename(cls, filename: str) -> str:
        """Strip path separators and dangerous characters from a file name.

        Raises:
            ValueError: If nothing usable remains or the name is reserved.
        """
        name = os.path.basename((filename or "").replace("\\", "/"))
        name = name.replace("\x00", "").strip(". ")
        if not name:
            raise ValueError("Filename is empty or invalid after sanitization")
        stem = name.split(".", 1)[0].lower()
        if stem in cls.RESERVED_FILENAMES:
            raise ValueError(f"Reserved filename: {name}")
        return name


def sanitize_text(value: str) -> str:
    """Module-level shortcut for InputSanitizer.sanitize_text."""
    return InputSanitizer.sanitize_text(value)
