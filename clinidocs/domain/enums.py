"""Domain enumerations for clinical documents.

Enums represent fixed sets of domain values (document type, trust status,
and the reason a terminal status was reached).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw):
        """Return the member for raw (member or case-insensitive value).

        Raises:
            ValueError: raw is not one of values().
        """
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid {cls.__name__} {raw!r}; expected one of {cls.values()}"
            ) from None


class DocumentType(_ValuesMixin, str, Enum):
    """Kind of clinical artifact. Closed set."""

    REPORT = "report"
    IMAGE = "image"
    LAB = "lab"
    MEDICATION = "medication"


class DocumentStatus(_ValuesMixin, str, Enum):
    """Derived trust level of a document's current version.

    PROCESSING is the only initial state; the other three are terminal for
    the version that produced them. A new version re-enters PROCESSING.
    """

    PROCESSING = "processing"
    VALIDATED = "validated"
    WARNING = "warning"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self is not DocumentStatus.PROCESSING


class StatusReason(_ValuesMixin, str, Enum):
    """Why a document reached WARNING or ERROR.

    Mismatch reasons come from findings ("we checked and it failed");
    failure reasons come from infrastructure ("we could not check").
    """

    PATIENT_NAME_MISMATCH = "patient_name_mismatch"
    PATIENT_DOB_MISMATCH = "patient_dob_mismatch"
    STORAGE_FAILURE = "storage_failure"
    VALIDATION_SERVICE_FAILURE = "validation_service_failure"

    @property
    def is_infrastructure_failure(self) -> bool:
        return self in (
            StatusReason.STORAGE_FAILURE,
            StatusReason.VALIDATION_SERVICE_FAILURE,
        )
