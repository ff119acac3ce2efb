"""Tests for domain and storage exceptions (error_code, message, details)."""

from clinidocs.domain.exceptions import (
    ClinidocsException,
    DocumentVersionConflictException,
    ResourceNotFoundException,
    StorageException,
    ValidationException,
    ValidationServiceFailure,
)
from clinidocs.infrastructure.exceptions import (
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)


def test_base_exception_default_error_code() -> None:
    """Base ClinidocsException uses class name as error_code when not provided."""
    exc = ClinidocsException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ClinidocsException"
    assert exc.details == {}


def test_base_exception_to_dict() -> None:
    exc = ClinidocsException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("title is required", field="title")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "title"}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("bad")
    assert exc.details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("document", "doc-1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "doc-1" in exc.message
    assert exc.details == {"resource_type": "document", "resource_id": "doc-1"}


def test_version_conflict_exception() -> None:
    exc = DocumentVersionConflictException("doc-1", expected=3, actual=4)
    assert exc.error_code == "DOCUMENT_VERSION_CONFLICT"
    assert exc.details == {"document_id": "doc-1", "expected": 3, "actual": 4}


def test_validation_service_failure_carries_reason() -> None:
    exc = ValidationServiceFailure("timed out", blob_ref="patients/p/documents/d/v/f.pdf")
    assert exc.error_code == "VALIDATION_SERVICE_FAILURE"
    assert exc.details["reason"] == "timed out"
    assert exc.details["blob_ref"].endswith("f.pdf")


def test_storage_errors_share_base() -> None:
    for exc in (
        StorageNotFoundError("a"),
        StorageUploadError("a", "disk full"),
        StoragePermissionError("../a", "path_validation"),
    ):
        assert isinstance(exc, StorageException)
        assert isinstance(exc, ClinidocsException)
        assert exc.error_code.startswith("STORAGE_")
