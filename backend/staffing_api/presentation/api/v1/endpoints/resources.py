"""CRUD endpoints, generated once per resource definition.

Every resource exposes the same five routes under ``/<name>``. Success
bodies use the ``{"result": "OK", ...}`` envelope; errors are turned into
``{"result": "NG", ...}`` by the application's exception handlers.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from staffing_api.application.schemas import CREATE_SCHEMAS, DeleteRequest, ResourceUpdate
from staffing_api.application.services import (
    ExpandedPage,
    ExpandedRecord,
    ListQuery,
    ResourceService,
    collect_filter_values,
    parse_active_only,
)
from staffing_api.application.services.query_filter import DEFAULT_PAGE, DEFAULT_PER_PAGE
from staffing_api.domain.entities import ResourceDefinition
from staffing_api.infrastructure.dependencies import resource_service_dependency


def record_envelope(
    definition: ResourceDefinition,
    expanded: ExpandedRecord,
    include_id: bool = False,
) -> dict[str, Any]:
    body: dict[str, Any] = {"result": "OK"}
    if include_id:
        body[definition.id_field] = expanded.record.business_id
    body[definition.item_key] = expanded.item
    body.update(expanded.references)
    return body


def page_envelope(definition: ResourceDefinition, expanded: ExpandedPage) -> dict[str, Any]:
    body: dict[str, Any] = {
        "result": "OK",
        "page": expanded.page.page,
        "perPage": expanded.page.per_page,
        "filteredCount": expanded.page.filtered_count,
        definition.list_key: expanded.items,
    }
    body.update(expanded.references)
    return body


def build_resource_router(definition: ResourceDefinition) -> APIRouter:
    """Create the list/create/get/update/delete routes for one resource."""
    router = APIRouter(prefix=f"/{definition.name}", tags=[definition.label])
    get_service = resource_service_dependency(definition)
    create_schema = CREATE_SCHEMAS[definition.name]

    @router.get("")
    async def list_records(
        request: Request,
        page: int = Query(DEFAULT_PAGE, ge=1),
        per_page: int = Query(DEFAULT_PER_PAGE, ge=1),
        active_only: str | None = Query(None, description='Send "false" to include inactive records'),
        service: ResourceService = Depends(get_service),
    ) -> dict[str, Any]:
        """List records; resource filters and include flags are read from the query string."""
        params = request.query_params
        query = ListQuery(
            page=page,
            per_page=per_page,
            active_only=parse_active_only(active_only),
            filters=collect_filter_values(params, definition.filters),
        )
        include = {
            linked.include_param
            for linked in definition.linked_collections
            if params.get(linked.include_param) == "true"
        }
        expanded = await service.list_records(query, include)
        return page_envelope(definition, expanded)

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_record(
        data: create_schema,
        service: ResourceService = Depends(get_service),
    ) -> dict[str, Any]:
        expanded = await service.create_record(data.model_dump(exclude_unset=True))
        return record_envelope(definition, expanded, include_id=True)

    @router.get("/{business_id}")
    async def get_record(
        business_id: int,
        service: ResourceService = Depends(get_service),
    ) -> dict[str, Any]:
        expanded = await service.get_record(business_id)
        return record_envelope(definition, expanded)

    @router.put("/{business_id}")
    async def update_record(
        business_id: int,
        data: ResourceUpdate | None = Body(None),
        service: ResourceService = Depends(get_service),
    ) -> dict[str, Any]:
        """Partial update guarded by the record's current lastUpdate."""
        payload = data.model_dump(exclude_unset=True) if data else {}
        expanded = await service.update_record(business_id, payload)
        return record_envelope(definition, expanded)

    @router.delete("/{business_id}")
    async def delete_record(
        business_id: int,
        data: DeleteRequest | None = Body(None),
        service: ResourceService = Depends(get_service),
    ) -> dict[str, Any]:
        """Soft delete guarded by the record's current lastUpdate."""
        expanded = await service.delete_record(business_id, data.lastUpdate if data else None)
        return record_envelope(definition, expanded)

    return router
