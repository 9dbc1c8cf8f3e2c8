from .document_resource_repository import DocumentResourceRepository

__all__ = [
    "DocumentResourceRepository",
]
