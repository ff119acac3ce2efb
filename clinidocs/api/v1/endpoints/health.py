"""Health check endpoint. Used for liveness checks."""

from fastapi import APIRouter, Request

from clinidocs.core.config import get_settings
from clinidocs.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus the number of validations still running."""
    pipeline = getattr(request.app.state, "upload_pipeline", None)
    return HealthResponse(
        version=get_settings().app_version,
        pending_validations=pipeline.pending if pipeline is not None else 0,
    )
