from .document_store import DocumentStore
from .resource_repository import ResourceRepository

__all__ = [
    "DocumentStore",
    "ResourceRepository",
]
