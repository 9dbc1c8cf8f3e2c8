"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staffing_api.application.interfaces import DocumentStore
from staffing_api.config import get_settings
from staffing_api.infrastructure.logging.log_config import setup_logging
from staffing_api.infrastructure.store.factory import build_document_store
from staffing_api.presentation.api.error_handlers import register_exception_handlers
from staffing_api.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, then open and close the document store."""
    settings = get_settings()
    setup_logging()

    # A store passed to create_app() belongs to the caller.
    owns_store = getattr(app.state, "document_store", None) is None
    if owns_store:
        app.state.document_store = await build_document_store(settings)

    logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)

    yield

    # Shutdown
    if owns_store:
        await app.state.document_store.close()


def create_app(store: DocumentStore | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    if store is not None:
        app.state.document_store = store

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "staffing_api.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
