from .base import Base
from .document_store import SQLAlchemyDocumentStore
from .session import create_session_factory

__all__ = [
    "Base",
    "SQLAlchemyDocumentStore",
    "create_session_factory",
]
