"""Blob storage: in-memory, local filesystem and S3-compatible backends.

Factory creates the backend from clinidocs.core.config. Implementations are
loaded lazily inside StorageFactory.create_blob_store() so that:
- Default (memory) and local only require aiofiles (main dependency).
- S3 backend only loads boto3 when used; install with: pip install 'clinidocs[s3]'.

Implementations satisfy IBlobStore (put, get, delete).
"""

from clinidocs.infrastructure.external.storage.factory import StorageFactory
from clinidocs.infrastructure.external.storage.memory_storage import InMemoryBlobStore

__all__ = [
    "InMemoryBlobStore",
    "StorageFactory",
]
