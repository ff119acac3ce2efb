"""Smoke tests for health and app wiring."""

from httpx import AsyncClient

from clinidocs.core.lifespan import create_lifespan
from clinidocs.infrastructure.external.storage import InMemoryBlobStore
from clinidocs.infrastructure.external.validation import UnconfiguredValidationService
from clinidocs.main import create_app


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("pending_validations") == 0


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.headers.get("x-request-id")


async def test_request_id_is_forwarded_when_safe(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id <script>"}
    )
    assert response.headers["x-request-id"] != "bad id <script>"
    assert " " not in response.headers["x-request-id"]


async def test_lifespan_wires_default_components() -> None:
    """Default settings: in-memory blobs, unconfigured validation, drained on exit."""
    app = create_app()
    async with create_lifespan(app):
        pipeline = app.state.upload_pipeline
        assert isinstance(pipeline.blob_store, InMemoryBlobStore)
        assert isinstance(pipeline.validation_service, UnconfiguredValidationService)
        assert app.state.document_query.store is pipeline.store
    assert app.state.http_client is None
