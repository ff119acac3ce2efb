"""HTTP client for the external AI validation service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from clinidocs.domain.entities import AIFindings
from clinidocs.domain.enums import DocumentType
from clinidocs.domain.exceptions import ValidationServiceFailure
from clinidocs.shared.context import get_request_id
from clinidocs.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ValidationResponse(BaseModel):
    """Findings payload returned by the service (camelCase or snake_case keys)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    patient_name_match: bool
    patient_dob_match: bool
    scan_date_detected: date | None = None
    physician_detected: str | None = None
    key_findings: list[str] = []

    def to_findings(self) -> AIFindings:
        return AIFindings(
            patient_name_match=self.patient_name_match,
            patient_dob_match=self.patient_dob_match,
            scan_date_detected=self.scan_date_detected,
            physician_detected=self.physician_detected,
            key_findings=tuple(self.key_findings),
        )


class HttpValidationService:
    """POSTs {blob_ref, document_type} to the service and parses its findings.

    Timeouts, transport errors, non-2xx responses and malformed bodies all
    raise ValidationServiceFailure. The caller bounds the overall call with
    its own timeout; the client timeout here only guards the socket.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = base_url
        self._api_key = api_key
        self._timeout = timeout
        self._shared_http = http_client

    @asynccontextmanager
    async def _http_cm(self):
        """Yield shared HTTP client or a short-lived one (connection reuse when shared)."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        return headers

    async def validate(self, blob_ref: str, document_type: DocumentType) -> AIFindings:
        payload: dict[str, Any] = {
            "blob_ref": blob_ref,
            "document_type": document_type.value,
        }
        try:
            async with self._http_cm() as client:
                response = await client.post(
                    self._url, json=payload, headers=self._headers()
                )
        except httpx.TimeoutException as e:
            raise ValidationServiceFailure("request timed out", blob_ref) from e
        except httpx.HTTPError as e:
            raise ValidationServiceFailure(f"transport error: {e}", blob_ref) from e

        if response.status_code >= 400:
            logger.error(
                "Validation service rejected %s: status=%d",
                blob_ref,
                response.status_code,
            )
            raise ValidationServiceFailure(
                f"service returned status {response.status_code}", blob_ref
            )
        try:
            body = ValidationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ValidationServiceFailure("malformed findings payload", blob_ref) from e
        return body.to_findings()
