"""Application service (use case) shared by every CRUD resource."""

import logging
from collections.abc import Collection
from typing import Any

from staffing_api.application.interfaces import ResourceRepository
from staffing_api.application.services.concurrency_guard import fresh_last_update, require_token
from staffing_api.application.services.id_allocator import IdAllocator
from staffing_api.application.services.query_filter import ListQuery, filter_and_paginate
from staffing_api.application.services.reference_expander import (
    ExpandedPage,
    ExpandedRecord,
    ReferenceExpander,
)
from staffing_api.domain.entities import (
    ACTIVE_FIELD,
    LAST_UPDATE_FIELD,
    SERVER_MANAGED_FIELDS,
    UPDATED_BY_FIELD,
    Record,
    ResourceDefinition,
)
from staffing_api.domain.exceptions import EntityNotFoundError, ImmutableFieldError
from staffing_api.domain.timestamps import format_last_update

logger = logging.getLogger(__name__)


class ResourceService:
    """Orchestrates list/create/get/update/soft-delete for one resource.

    Depends on the repository, the id allocator and the reference expander
    (DI). Every mutation stamps ``lastUpdate`` and ``updatedBy``; updates and
    deletes are guarded by the caller's ``lastUpdate`` token.
    """

    def __init__(
        self,
        definition: ResourceDefinition,
        repository: ResourceRepository,
        allocator: IdAllocator,
        expander: ReferenceExpander,
        updated_by: str,
    ):
        self._definition = definition
        self._repository = repository
        self._allocator = allocator
        self._expander = expander
        self._updated_by = updated_by

    @property
    def definition(self) -> ResourceDefinition:
        return self._definition

    def _clean_fields(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Reject the business id and drop server-managed fields."""
        if self._definition.id_field in payload:
            raise ImmutableFieldError(self._definition.id_field)
        return {
            name: value
            for name, value in payload.items()
            if name not in SERVER_MANAGED_FIELDS
        }

    async def _get_active(self, business_id: int) -> Record:
        record = await self._repository.find_by_business_id(business_id)
        if record is None or not record.is_active:
            raise EntityNotFoundError(self._definition.label, business_id)
        return record

    async def list_records(
        self,
        query: ListQuery,
        include: Collection[str] = (),
    ) -> ExpandedPage:
        records = await self._repository.find_all()
        page = filter_and_paginate(records, query, self._definition.filters)
        return await self._expander.expand_page(self._definition, page, include)

    async def get_record(self, business_id: int) -> ExpandedRecord:
        """Direct lookup. Soft-deleted records are still returned."""
        record = await self._repository.find_by_business_id(business_id)
        if record is None:
            raise EntityNotFoundError(self._definition.label, business_id)
        return await self._expander.expand_record(self._definition, record)

    async def create_record(self, payload: dict[str, Any]) -> ExpandedRecord:
        fields = self._clean_fields(payload)
        fields.update({
            ACTIVE_FIELD: True,
            LAST_UPDATE_FIELD: format_last_update(),
            UPDATED_BY_FIELD: self._updated_by,
        })
        record = await self._allocator.allocate_and_create(fields)
        return await self._expander.expand_record(self._definition, record)

    async def update_record(self, business_id: int, payload: dict[str, Any]) -> ExpandedRecord:
        token = payload.get(LAST_UPDATE_FIELD)
        changes = self._clean_fields(payload)
        token = require_token(token)

        record = await self._get_active(business_id)
        changes[LAST_UPDATE_FIELD] = await fresh_last_update(token)
        changes[UPDATED_BY_FIELD] = self._updated_by

        updated = await self._repository.guarded_update(record, token, changes)
        logger.info("Updated %s %s=%s", self._definition.label, self._definition.id_field, business_id)
        return await self._expander.expand_record(self._definition, updated)

    async def delete_record(self, business_id: int, token: str | None) -> ExpandedRecord:
        """Soft delete: flip ``isActive`` to false under the token guard."""
        token = require_token(token)

        record = await self._get_active(business_id)
        changes = {
            ACTIVE_FIELD: False,
            LAST_UPDATE_FIELD: await fresh_last_update(token),
            UPDATED_BY_FIELD: self._updated_by,
        }

        deleted = await self._repository.guarded_update(record, token, changes)
        logger.info("Deactivated %s %s=%s", self._definition.label, self._definition.id_field, business_id)
        return await self._expander.expand_record(self._definition, deleted)
