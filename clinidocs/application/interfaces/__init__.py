"""Application interfaces (ports): repository and external service protocols."""

from clinidocs.application.interfaces.repositories import IDocumentStore
from clinidocs.application.interfaces.services import IBlobStore, IValidationService

__all__ = [
    "IBlobStore",
    "IDocumentStore",
    "IValidationService",
]
