"""Shared utilities: datetime, generators, sanitization."""

from clinidocs.shared.utils.datetime import (
    ensure_utc,
    lower_bound,
    upper_bound,
    utc_now,
)
from clinidocs.shared.utils.generators import compute_checksum, generate_cuid
from clinidocs.shared.utils.sanitization import InputSanitizer, sanitize_text

__all__ = [
    "compute_checksum",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "lower_bound",
    "upper_bound",
    "InputSanitizer",
    "sanitize_text",
]
