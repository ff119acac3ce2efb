"""Local filesystem blob store with path validation and atomic writes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from clinidocs.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from clinidocs.shared.utils.datetime import utc_now

META_SUFFIX = ".meta.json"


class LocalBlobStore:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename,
    so a reader never sees a partially written blob. Content type and upload
    time are kept in a .meta.json sidecar.
    """

    def __init__(self, storage_root: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all blobs (created if missing).
        """
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(storage_ref, "path_validation")
        return full_path

    @staticmethod
    def _meta_path(file_path: Path) -> Path:
        return file_path.with_name(file_path.name + META_SUFFIX)

    async def put(
        self,
        storage_ref: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Write data atomically under storage_ref. Overwrites an existing blob."""
        target_path = self._get_full_path(storage_ref)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                await aiofiles.os.replace(temp_path, target_path)
            finally:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
            meta = {
                "content_type": content_type,
                "size": len(data),
                "stored_at": utc_now().isoformat(),
            }
            async with aiofiles.open(self._meta_path(target_path), "w") as f:
                await f.write(json.dumps(meta, indent=2))
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return storage_ref

    async def get(self, blob_ref: str) -> bytes:
        """Return blob content."""
        file_path = self._get_full_path(blob_ref)
        if not file_path.exists():
            raise StorageNotFoundError(blob_ref)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise StorageDownloadError(blob_ref, str(e)) from e

    async def delete(self, blob_ref: str) -> bool:
        """Delete blob and sidecar, pruning empty parent directories. Returns True if deleted."""
        file_path = self._get_full_path(blob_ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
            meta_path = self._meta_path(file_path)
            if meta_path.exists():
                await aiofiles.os.remove(meta_path)
        except OSError as e:
            raise StorageDeleteError(blob_ref, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                if any(parent.iterdir()):
                    break
                parent.rmdir()
            except OSError:
                # Another writer populated the directory in between; leave it.
                break
            parent = parent.parent
        return True
