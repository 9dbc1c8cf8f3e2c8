"""Resolves id references into the referenced records at read time.

Two shapes are supported. A foreign key is a single id field whose target
is returned next to the record (or, for listings, as a list of the
distinct targets). A linked collection is a list of ids, or of objects
carrying the target's id field, that is replaced in place by the target
records. Missing targets are logged and tolerated.
"""

import logging
from collections.abc import Callable, Collection
from dataclasses import dataclass, field
from typing import Any

from staffing_api.application.interfaces import ResourceRepository
from staffing_api.application.services.query_filter import Page
from staffing_api.domain.entities import ForeignKey, Record, ResourceDefinition

logger = logging.getLogger(__name__)


@dataclass
class ExpandedRecord:
    record: Record
    item: dict[str, Any]
    references: dict[str, dict[str, Any] | None] = field(default_factory=dict)


@dataclass
class ExpandedPage:
    page: Page
    items: list[dict[str, Any]]
    references: dict[str, list[dict[str, Any]]] = field(default_factory=dict)


def _as_business_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


class _ReferenceLookup:
    """Per-request memo of referenced records, keyed by (resource, id)."""

    def __init__(self, repository_for: Callable[[str], ResourceRepository]):
        self._repository_for = repository_for
        self._cache: dict[tuple[str, int], dict[str, Any] | None] = {}

    def id_field(self, resource: str) -> str:
        return self._repository_for(resource).definition.id_field

    async def resolve_one(self, resource: str, value: Any) -> dict[str, Any] | None:
        if value is None:
            return None
        business_id = _as_business_id(value)
        if business_id is None:
            logger.warning("Unusable %s reference %r", resource, value)
            return None

        cache_key = (resource, business_id)
        if cache_key not in self._cache:
            record = await self._repository_for(resource).find_by_business_id(business_id)
            if record is None:
                logger.warning("Referenced %s id=%s not found", resource, business_id)
            self._cache[cache_key] = record.to_dict() if record else None
        return self._cache[cache_key]

    async def resolve_many(self, resource: str, values: Any) -> Any:
        if not isinstance(values, list):
            logger.warning("Expected a list of %s references, got %r", resource, type(values).__name__)
            return values

        id_field = self.id_field(resource)
        resolved = []
        for value in values:
            reference = value.get(id_field) if isinstance(value, dict) else value
            target = await self.resolve_one(resource, reference)
            if target is not None:
                resolved.append(target)
        return resolved


class ReferenceExpander:
    """Builds response payloads with references resolved."""

    def __init__(self, repository_for: Callable[[str], ResourceRepository]):
        self._repository_for = repository_for

    async def expand_record(self, definition: ResourceDefinition, record: Record) -> ExpandedRecord:
        lookup = _ReferenceLookup(self._repository_for)
        item = record.to_dict()

        for linked in definition.linked_collections:
            if linked.field in item:
                item[linked.field] = await lookup.resolve_many(linked.resource, item[linked.field])

        references = {}
        for foreign_key in definition.foreign_keys:
            references[foreign_key.key] = await lookup.resolve_one(
                foreign_key.resource, item.get(foreign_key.field)
            )
        return ExpandedRecord(record=record, item=item, references=references)

    def _target_foreign_keys(self, foreign_key: ForeignKey) -> tuple[ForeignKey, ...]:
        return self._repository_for(foreign_key.resource).definition.foreign_keys

    async def _collect(
        self,
        lookup: _ReferenceLookup,
        foreign_key: ForeignKey,
        value: Any,
        references: dict[str, list[dict[str, Any]]],
        seen: set[tuple[str, int]],
    ) -> dict[str, Any] | None:
        target = await lookup.resolve_one(foreign_key.resource, value)
        if target is not None:
            identity = (foreign_key.resource, target.get(lookup.id_field(foreign_key.resource)))
            if identity not in seen:
                seen.add(identity)
                references[foreign_key.list_key].append(target)
        return target

    async def expand_page(
        self,
        definition: ResourceDefinition,
        page: Page,
        include: Collection[str] = (),
    ) -> ExpandedPage:
        """Expand one listing page.

        Linked collections appear only when their include flag is listed in
        ``include``; foreign-key targets are gathered once per distinct id
        under each key's list key. The targets' own foreign keys are
        followed one level, so transfers list the project types of the
        projects they reference.
        """
        lookup = _ReferenceLookup(self._repository_for)
        references: dict[str, list[dict[str, Any]]] = {}
        for foreign_key in definition.foreign_keys:
            references.setdefault(foreign_key.list_key, [])
            for nested in self._target_foreign_keys(foreign_key):
                references.setdefault(nested.list_key, [])
        seen: set[tuple[str, int]] = set()
        items = []

        for record in page.items:
            item = record.to_dict()

            for linked in definition.linked_collections:
                if linked.include_param not in include:
                    item.pop(linked.field, None)
                elif linked.field in item:
                    item[linked.field] = await lookup.resolve_many(linked.resource, item[linked.field])

            for foreign_key in definition.foreign_keys:
                target = await self._collect(
                    lookup, foreign_key, item.get(foreign_key.field), references, seen
                )
                if target is None:
                    continue
                for nested in self._target_foreign_keys(foreign_key):
                    await self._collect(lookup, nested, target.get(nested.field), references, seen)

            items.append(item)

        return ExpandedPage(page=page, items=items, references=references)
