"""Blob store factory: creates memory, local or S3 backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from clinidocs.application.interfaces.services import IBlobStore

if TYPE_CHECKING:
    from clinidocs.core.config import Settings


class StorageFactory:
    """Factory for blob store instances based on configuration."""

    @staticmethod
    def create_blob_store(settings: "Settings | None" = None) -> IBlobStore:
        """Create blob store from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            InMemoryBlobStore, LocalBlobStore or S3BlobStore.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from clinidocs.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "memory":
            from clinidocs.infrastructure.external.storage.memory_storage import (
                InMemoryBlobStore,
            )

            return InMemoryBlobStore()
        if backend == "local":
            from clinidocs.infrastructure.external.storage.local_storage import (
                LocalBlobStore,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalBlobStore(storage_root=s.storage_root)
        if backend == "s3":
            if not s.s3_bucket:
                raise ValueError("S3_BUCKET required for s3 backend")
            try:
                from clinidocs.infrastructure.external.storage.s3_storage import (
                    S3BlobStore,
                )
            except ImportError as e:
                raise ValueError(
                    "S3 backend requires boto3. Install with: pip install 'clinidocs[s3]'"
                ) from e
            return S3BlobStore(
                bucket=s.s3_bucket,
                region=s.s3_region,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=(
                    s.s3_secret_key.get_secret_value() if s.s3_secret_key else None
                ),
            )
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'memory', 'local', 's3'"
        )
