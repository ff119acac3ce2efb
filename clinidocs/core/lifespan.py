"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of the document store, blob store, validation
client and upload pipeline onto app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from clinidocs.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadPipeline,
)
from clinidocs.core.config import Settings, get_settings
from clinidocs.infrastructure.external.storage import StorageFactory
from clinidocs.infrastructure.external.validation import ValidationServiceFactory
from clinidocs.infrastructure.persistence.document_store import InMemoryDocumentStore
from clinidocs.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def build_pipeline(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> DocumentUploadPipeline:
    """Compose the upload pipeline from settings (composition root)."""
    return DocumentUploadPipeline(
        store=InMemoryDocumentStore(),
        blob_store=StorageFactory.create_blob_store(settings),
        validation_service=ValidationServiceFactory.create_validation_service(
            settings, http_client=http_client
        ),
        validation_timeout=settings.validation_timeout_seconds,
        max_upload_size=settings.max_upload_size,
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, shared HTTP client, pipeline and query service.
    Shutdown: drain (then cancel) background validation tasks, close the
    HTTP client.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared HTTP client for validation calls (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.validation_timeout_seconds)
    pipeline = build_pipeline(settings, http_client=app.state.http_client)
    app.state.upload_pipeline = pipeline
    app.state.document_query = DocumentQueryService(pipeline.store)
    logger.info(
        "%s %s started (storage=%s)",
        settings.app_name,
        settings.app_version,
        settings.storage_backend,
    )

    yield

    # ---- Shutdown ----
    await pipeline.shutdown(settings.shutdown_drain_seconds)
    logger.info("Background validation tasks drained")

    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")
