"""Builds the configured DocumentStore implementation."""

import logging

from staffing_api.application.interfaces import DocumentStore
from staffing_api.config import Settings
from staffing_api.infrastructure.database import SQLAlchemyDocumentStore
from staffing_api.infrastructure.store.firebase_store import FirebaseDocumentStore
from staffing_api.infrastructure.store.memory_store import InMemoryDocumentStore

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("memory", "firebase", "sql")


async def build_document_store(settings: Settings) -> DocumentStore:
    """Instantiate the store selected by ``settings.store_backend``.

    The SQL backend creates its table on first use.
    """
    backend = settings.store_backend.strip().lower()

    if backend == "firebase":
        if not settings.firebase_database_url:
            raise ValueError("FIREBASE_DATABASE_URL must be set when STORE_BACKEND=firebase")
        store: DocumentStore = FirebaseDocumentStore.from_credentials(
            settings.firebase_credentials_file,
            settings.firebase_database_url,
        )
    elif backend == "sql":
        sql_store = SQLAlchemyDocumentStore.from_url(settings.database_url)
        await sql_store.create_tables()
        store = sql_store
    elif backend == "memory":
        store = InMemoryDocumentStore()
    else:
        raise ValueError(
            f"Unknown STORE_BACKEND '{settings.store_backend}', expected one of {', '.join(STORE_BACKENDS)}"
        )

    logger.info("Document store ready: %s", backend)
    return store
