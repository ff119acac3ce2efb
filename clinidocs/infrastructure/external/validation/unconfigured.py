"""Validation service used when no service URL is configured."""

from clinidocs.domain.entities import AIFindings
from clinidocs.domain.enums import DocumentType
from clinidocs.domain.exceptions import ValidationServiceFailure


class UnconfiguredValidationService:
    """Fails every call, so documents end in error / validation_service_failure."""

    REASON = "validation service is not configured"

    async def validate(self, blob_ref: str, document_type: DocumentType) -> AIFindings:
        raise ValidationServiceFailure(self.REASON, blob_ref)
