"""Pytest configuration and fixtures for clinidocs.

Pipeline fixtures use the in-memory document and blob stores with an
AsyncMock validation service. HTTP tests run against create_app() with the
same pipeline placed on app.state (ASGITransport does not run the lifespan).
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from clinidocs.application.dtos.document import DocumentMetadataInput, FileUpload
from clinidocs.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadPipeline,
)
from clinidocs.core.config import get_settings
from clinidocs.core.limiter import limiter
from clinidocs.domain.entities import AIFindings
from clinidocs.infrastructure.external.storage import InMemoryBlobStore
from clinidocs.infrastructure.persistence.document_store import InMemoryDocumentStore
from clinidocs.main import create_app

MATCHING_FINDINGS = AIFindings(
    patient_name_match=True,
    patient_dob_match=True,
    scan_date_detected=date(2023, 3, 10),
    physician_detected="Dr. Johnson",
    key_findings=("No abnormalities detected", "Normal brain structure"),
)


def mri_metadata(**overrides) -> DocumentMetadataInput:
    """Metadata for the MRI report used across scenarios."""
    values = {
        "title": "MRI Report",
        "type": "report",
        "uploaded_by": "dr-smith",
        "tags": ["radiology", "brain", "mri"],
    }
    values.update(overrides)
    return DocumentMetadataInput(**values)


def pdf_upload(content: bytes = b"%PDF-1.4 mri scan", filename: str = "mri-report.pdf") -> FileUpload:
    return FileUpload(filename=filename, content=content, content_type="application/pdf")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def validation_service() -> AsyncMock:
    """Validation service double; returns matching findings unless a test overrides it."""
    service = AsyncMock()
    service.validate = AsyncMock(return_value=MATCHING_FINDINGS)
    return service


@pytest.fixture
async def pipeline(store, blob_store, validation_service) -> DocumentUploadPipeline:
    pipe = DocumentUploadPipeline(
        store,
        blob_store,
        validation_service,
        validation_timeout=1.0,
        max_upload_size=1024 * 1024,
    )
    yield pipe
    await pipe.shutdown(1.0)


@pytest.fixture
def query_service(store) -> DocumentQueryService:
    return DocumentQueryService(store)


@pytest.fixture
def app(pipeline, query_service):
    """FastAPI app wired to the test pipeline, with rate limits off."""
    application = create_app()
    application.state.upload_pipeline = pipeline
    application.state.document_query = query_service
    limiter.enabled = False
    yield application
    limiter.enabled = True


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
