"""AI validation service clients.

Implementations satisfy IValidationService (validate). The factory picks
the HTTP client when VALIDATION_SERVICE_URL is set.
"""

from clinidocs.infrastructure.external.validation.factory import (
    ValidationServiceFactory,
)
from clinidocs.infrastructure.external.validation.http_client import (
    HttpValidationService,
)
from clinidocs.infrastructure.external.validation.unconfigured import (
    UnconfiguredValidationService,
)

__all__ = [
    "HttpValidationService",
    "UnconfiguredValidationService",
    "ValidationServiceFactory",
]
