"""S3-compatible object storage (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio
import hashlib

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from clinidocs.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageUploadError,
)

_MISSING_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_missing(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _MISSING_CODES


class S3BlobStore:
    """S3-compatible storage with server-side encryption.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        client=None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            client: Prebuilt boto3 S3 client (tests); built from the above if None.
        """
        self.bucket = bucket
        self.region = region
        if client is None:
            extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
            client = boto3.client(
                "s3",
                region_name=region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                **extra,
            )
        self._client = client

    async def put(
        self,
        storage_ref: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Upload object with a sha256 metadata entry. Overwrites an existing key."""

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
                Metadata={
                    "sha256": hashlib.sha256(data).hexdigest(),
                    "original-size": str(len(data)),
                },
            )

        try:
            await asyncio.to_thread(_put)
        except (ClientError, BotoCoreError) as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return storage_ref

    async def get(self, blob_ref: str) -> bytes:
        """Return object content."""

        def _get() -> bytes:
            resp = self._client.get_object(Bucket=self.bucket, Key=blob_ref)
            return resp["Body"].read()

        try:
            return await asyncio.to_thread(_get)
        except ClientError as e:
            if _is_missing(e):
                raise StorageNotFoundError(blob_ref) from e
            raise StorageDownloadError(blob_ref, str(e)) from e
        except BotoCoreError as e:
            raise StorageDownloadError(blob_ref, str(e)) from e

    async def delete(self, blob_ref: str) -> bool:
        """Delete object. Returns True if deleted, False if it did not exist."""

        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=blob_ref)
            except ClientError as e:
                if _is_missing(e):
                    return False
                raise
            self._client.delete_object(Bucket=self.bucket, Key=blob_ref)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except (ClientError, BotoCoreError) as e:
            raise StorageDeleteError(blob_ref, str(e)) from e
