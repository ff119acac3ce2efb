"""Domain exceptions for the clinical document engine.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class ClinidocsException(Exception):
    """Base exception for all clinidocs errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ClinidocsException):
    """Raised when a command is rejected before any state change (bad input shape)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(ClinidocsException):
    """Raised when a requested document or version is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'document', 'version').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DocumentVersionConflictException(ClinidocsException):
    """Raised when a version append did not see the version number it expected."""

    def __init__(self, document_id: str, expected: int, actual: int) -> None:
        super().__init__(
            "Document version was appended by another request; retry.",
            "DOCUMENT_VERSION_CONFLICT",
            {"document_id": document_id, "expected": expected, "actual": actual},
        )


class ValidationServiceFailure(ClinidocsException):
    """Raised when the AI validation service times out or returns an error."""

    def __init__(self, reason: str, blob_ref: str | None = None) -> None:
        """Initialize with the failure reason.

        Args:
            reason: Human-readable cause (e.g. 'timed out after 30s').
            blob_ref: Stored document reference that was being validated.
        """
        details: dict[str, Any] = {"reason": reason}
        if blob_ref:
            details["blob_ref"] = blob_ref
        super().__init__(
            f"Validation service failed: {reason}",
            "VALIDATION_SERVICE_FAILURE",
            details,
        )


class StorageException(ClinidocsException):
    """Base exception for blob storage operations.

    Backends raise the concrete subclasses in
    clinidocs.infrastructure.exceptions.
    """
