"""Blob store backends: in-memory, local filesystem and S3 (stubbed client)."""

import hashlib
import io
import json

import boto3
import pytest
from botocore.response import StreamingBody
from botocore.stub import Stubber

from clinidocs.core.config import Settings
from clinidocs.infrastructure.exceptions import (
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from clinidocs.infrastructure.external.storage import InMemoryBlobStore, StorageFactory
from clinidocs.infrastructure.external.storage.local_storage import LocalBlobStore
from clinidocs.infrastructure.external.storage.s3_storage import S3BlobStore

REF = "patients/p-1/documents/d-1/v-1/mri.pdf"


class TestInMemoryBlobStore:
    async def test_put_get_delete(self) -> None:
        store = InMemoryBlobStore()
        assert await store.put(REF, b"%PDF", "application/pdf") == REF
        assert REF in store
        assert await store.get(REF) == b"%PDF"
        assert await store.delete(REF) is True
        assert await store.delete(REF) is False
        with pytest.raises(StorageNotFoundError):
            await store.get(REF)


class TestLocalBlobStore:
    async def test_round_trip_with_sidecar(self, tmp_path) -> None:
        store = LocalBlobStore(str(tmp_path))
        await store.put(REF, b"%PDF-1.4", "application/pdf")

        target = tmp_path / REF
        assert target.read_bytes() == b"%PDF-1.4"
        meta = json.loads((tmp_path / (REF + ".meta.json")).read_text())
        assert meta["content_type"] == "application/pdf"
        assert meta["size"] == 8
        assert not list(target.parent.glob(".tmp_*"))
        assert await store.get(REF) == b"%PDF-1.4"

    async def test_overwrite_replaces_content(self, tmp_path) -> None:
        store = LocalBlobStore(str(tmp_path))
        await store.put(REF, b"one")
        await store.put(REF, b"two")
        assert await store.get(REF) == b"two"

    async def test_delete_prunes_empty_directories(self, tmp_path) -> None:
        store = LocalBlobStore(str(tmp_path))
        await store.put(REF, b"x")
        await store.put("patients/p-1/other.pdf", b"y")

        assert await store.delete(REF) is True
        assert not (tmp_path / "patients/p-1/documents").exists()
        assert (tmp_path / "patients/p-1/other.pdf").exists()
        assert await store.delete(REF) is False

    async def test_missing_blob(self, tmp_path) -> None:
        with pytest.raises(StorageNotFoundError):
            await LocalBlobStore(str(tmp_path)).get(REF)

    @pytest.mark.parametrize("ref", ["../outside.pdf", "a/../../outside.pdf", "."])
    async def test_path_traversal_is_refused(self, tmp_path, ref) -> None:
        store = LocalBlobStore(str(tmp_path / "root"))
        with pytest.raises(StoragePermissionError):
            await store.put(ref, b"x")
        assert not (tmp_path / "outside.pdf").exists()


@pytest.fixture
def s3_client():
    client = boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


class TestS3BlobStore:
    async def test_put_encrypts_and_records_checksum(self, s3_client) -> None:
        client, stubber = s3_client
        stubber.add_response(
            "put_object",
            {},
            {
                "Bucket": "clinical",
                "Key": REF,
                "Body": b"%PDF",
                "ContentType": "application/pdf",
                "ServerSideEncryption": "AES256",
                "Metadata": {
                    "sha256": hashlib.sha256(b"%PDF").hexdigest(),
                    "original-size": "4",
                },
            },
        )
        store = S3BlobStore("clinical", client=client)
        assert await store.put(REF, b"%PDF", "application/pdf") == REF

    async def test_put_failure(self, s3_client) -> None:
        client, stubber = s3_client
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(StorageUploadError):
            await S3BlobStore("clinical", client=client).put(REF, b"%PDF")

    async def test_get(self, s3_client) -> None:
        client, stubber = s3_client
        stubber.add_response(
            "get_object",
            {"Body": StreamingBody(io.BytesIO(b"%PDF"), 4)},
            {"Bucket": "clinical", "Key": REF},
        )
        assert await S3BlobStore("clinical", client=client).get(REF) == b"%PDF"

    async def test_get_missing(self, s3_client) -> None:
        client, stubber = s3_client
        stubber.add_client_error("get_object", service_error_code="NoSuchKey", http_status_code=404)
        with pytest.raises(StorageNotFoundError):
            await S3BlobStore("clinical", client=client).get(REF)

    async def test_get_other_error(self, s3_client) -> None:
        client, stubber = s3_client
        stubber.add_client_error("get_object", service_error_code="InternalError", http_status_code=500)
        with pytest.raises(StorageDownloadError):
            await S3BlobStore("clinical", client=client).get(REF)

    async def test_delete(self, s3_client) -> None:
        client, stubber = s3_client
        params = {"Bucket": "clinical", "Key": REF}
        stubber.add_response("head_object", {}, params)
        stubber.add_response("delete_object", {}, params)
        stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)
        store = S3BlobStore("clinical", client=client)
        assert await store.delete(REF) is True
        assert await store.delete(REF) is False


class TestStorageFactory:
    def test_memory_backend(self) -> None:
        store = StorageFactory.create_blob_store(Settings(_env_file=None))
        assert isinstance(store, InMemoryBlobStore)

    def test_local_backend(self, tmp_path) -> None:
        settings = Settings(_env_file=None, storage_backend="local", storage_root=str(tmp_path))
        store = StorageFactory.create_blob_store(settings)
        assert isinstance(store, LocalBlobStore)
        assert store.storage_root == tmp_path.resolve()

    def test_s3_backend(self) -> None:
        settings = Settings(
            _env_file=None,
            storage_backend="s3",
            s3_bucket="clinical",
            s3_access_key="test",
            s3_secret_key="test",
        )
        store = StorageFactory.create_blob_store(settings)
        assert isinstance(store, S3BlobStore)
        assert store.bucket == "clinical"
