"""Validation service factory: HTTP client when a URL is set, else unconfigured."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from clinidocs.application.interfaces.services import IValidationService
from clinidocs.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from clinidocs.core.config import Settings

logger = get_logger(__name__)


class ValidationServiceFactory:
    """Factory for validation service instances based on configuration."""

    @staticmethod
    def create_validation_service(
        settings: "Settings | None" = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> IValidationService:
        """Create validation service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().
            http_client: Optional shared httpx.AsyncClient for connection reuse.

        Returns:
            HttpValidationService, or UnconfiguredValidationService when
            validation_service_url is empty.
        """
        from clinidocs.core.config import get_settings

        s = settings or get_settings()
        if not s.validation_service_url:
            from clinidocs.infrastructure.external.validation.unconfigured import (
                UnconfiguredValidationService,
            )

            logger.warning(
                "VALIDATION_SERVICE_URL not set; documents will fail validation"
            )
            return UnconfiguredValidationService()

        from clinidocs.infrastructure.external.validation.http_client import (
            HttpValidationService,
        )

        api_key = s.validation_service_api_key
        return HttpValidationService(
            s.validation_service_url,
            api_key=api_key.get_secret_value() if api_key else None,
            timeout=s.validation_timeout_seconds,
            http_client=http_client,
        )
