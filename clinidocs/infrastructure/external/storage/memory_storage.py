"""In-process blob store (default backend; also used by tests)."""

from __future__ import annotations

import asyncio

from clinidocs.infrastructure.exceptions import StorageNotFoundError


class InMemoryBlobStore:
    """Blob store backed by a dict. Contents are lost on restart."""

    def __init__(self) -> None:
        self._blobs: dict[str, tuple[bytes, str]] = {}
        self._lock = asyncio.Lock()

    async def put(
        self,
        storage_ref: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        async with self._lock:
            self._blobs[storage_ref] = (bytes(data), content_type)
        return storage_ref

    async def get(self, blob_ref: str) -> bytes:
        entry = self._blobs.get(blob_ref)
        if entry is None:
            raise StorageNotFoundError(blob_ref)
        return entry[0]

    async def delete(self, blob_ref: str) -> bool:
        async with self._lock:
            return self._blobs.pop(blob_ref, None) is not None

    def __contains__(self, blob_ref: object) -> bool:
        return blob_ref in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)
