"""Validation interpreter: maps AI findings to a document trust status.

Pure and total. Only the two identity flags decide the status; scan date,
physician and key findings are informational. Most severe wins:

    sentinel findings  -> ERROR   (the service could not check)
    name mismatch      -> ERROR   (wrong-patient attachment blocks trust outright)
    a flag not a bool  -> ERROR   (identity was not confirmed)
    dob mismatch       -> WARNING (needs human review)
    otherwise          -> VALIDATED

The two "could not check" rules carry reason VALIDATION_SERVICE_FAILURE.
"""

from dataclasses import dataclass

from clinidocs.domain.entities import AIFindings
from clinidocs.domain.enums import DocumentStatus, StatusReason


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of interpreting one validation pass for a version."""

    status: DocumentStatus
    ai_processed: bool
    reason: StatusReason | None = None


def _not_checked() -> ValidationOutcome:
    return ValidationOutcome(
        status=DocumentStatus.ERROR,
        ai_processed=True,
        reason=StatusReason.VALIDATION_SERVICE_FAILURE,
    )


def interpret_findings(findings: AIFindings) -> ValidationOutcome:
    """Derive status from findings. First matching rule wins."""
    if findings.is_unavailable:
        return _not_checked()
    if findings.patient_name_match is False:
        return ValidationOutcome(
            status=DocumentStatus.ERROR,
            ai_processed=True,
            reason=StatusReason.PATIENT_NAME_MISMATCH,
        )
    if not isinstance(findings.patient_name_match, bool) or not isinstance(
        findings.patient_dob_match, bool
    ):
        return _not_checked()
    if findings.patient_dob_match is False:
        return ValidationOutcome(
            status=DocumentStatus.WARNING,
            ai_processed=True,
            reason=StatusReason.PATIENT_DOB_MISMATCH,
        )
    return ValidationOutcome(status=DocumentStatus.VALIDATED, ai_processed=True)
