"""Application services: validation interpreter."""

from clinidocs.application.services.validation_interpreter import (
    ValidationOutcome,
    interpret_findings,
)

__all__ = [
    "ValidationOutcome",
    "interpret_findings",
]
