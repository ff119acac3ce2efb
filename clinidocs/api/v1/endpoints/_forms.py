"""Helpers for multipart form fields shared by upload routes."""

import json

from fastapi import UploadFile

from clinidocs.application.dtos.document import FileUpload
from clinidocs.domain.exceptions import ValidationException


def parse_tags(raw: str | None) -> list[str]:
    """Parse tags sent as a JSON list or a comma-separated string."""
    if raw is None or not raw.strip():
        return []
    text = raw.strip()
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationException("tags is not valid JSON", field="tags") from e
        if not isinstance(parsed, list) or not all(isinstance(t, str) for t in parsed):
            raise ValidationException("tags must be a list of strings", field="tags")
        return parsed
    return text.split(",")


async def read_upload(file: UploadFile) -> FileUpload:
    """Read an UploadFile fully into a FileUpload."""
    content = await file.read()
    return FileUpload(
        filename=file.filename or "",
        content=content,
        content_type=file.content_type or "application/octet-stream",
    )
