"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator, Callable

from fastapi import Depends, Request

from staffing_api.application.catalog import get_resource
from staffing_api.application.interfaces import DocumentStore, ResourceRepository
from staffing_api.application.services import (
    IdAllocator,
    ReferenceExpander,
    ResourceService,
)
from staffing_api.config import Settings, get_settings
from staffing_api.domain.entities import ResourceDefinition
from staffing_api.infrastructure.repositories import DocumentResourceRepository


def get_document_store(request: Request) -> DocumentStore:
    """The store built at startup (or installed by create_app for tests)."""
    return request.app.state.document_store


def build_resource_service(
    store: DocumentStore,
    definition: ResourceDefinition,
    settings: Settings,
) -> ResourceService:
    repository = DocumentResourceRepository(store, definition)

    def repository_for(name: str) -> ResourceRepository:
        return DocumentResourceRepository(store, get_resource(name))

    return ResourceService(
        definition=definition,
        repository=repository,
        allocator=IdAllocator(repository, max_attempts=settings.max_allocation_attempts),
        expander=ReferenceExpander(repository_for),
        updated_by=settings.default_user_email,
    )


def resource_service_dependency(
    definition: ResourceDefinition,
) -> Callable[..., AsyncGenerator[ResourceService, None]]:
    """Build the dependency that provides a ResourceService for ``definition``."""

    async def get_resource_service(
        store: DocumentStore = Depends(get_document_store),
    ) -> AsyncGenerator[ResourceService, None]:
        yield build_resource_service(store, definition, get_settings())

    return get_resource_service
