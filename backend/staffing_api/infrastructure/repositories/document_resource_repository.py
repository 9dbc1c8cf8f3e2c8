"""DocumentStore implementation of the ResourceRepository port."""

import logging
from typing import Any

from staffing_api.application.interfaces import DocumentStore, ResourceRepository
from staffing_api.application.services.concurrency_guard import check_token
from staffing_api.domain.entities import (
    ACTIVE_FIELD,
    LAST_UPDATE_FIELD,
    Record,
    ResourceDefinition,
)
from staffing_api.domain.exceptions import EntityNotFoundError, KeyOccupiedError

logger = logging.getLogger(__name__)


class DocumentResourceRepository(ResourceRepository):
    """Concrete repository storing each record as a document under the resource collection."""

    def __init__(self, store: DocumentStore, definition: ResourceDefinition):
        self._store = store
        self._definition = definition

    @property
    def definition(self) -> ResourceDefinition:
        return self._definition

    def _to_record(self, key: str, data: Any) -> Record | None:
        if not isinstance(data, dict):
            return None
        return Record(key=str(key), id_field=self._definition.id_field, data=data)

    async def find_by_business_id(self, business_id: int) -> Record | None:
        matches = await self._store.find_by_child(
            self._definition.collection, self._definition.id_field, business_id
        )
        for key, data in matches.items():
            record = self._to_record(key, data)
            if record is not None:
                if len(matches) > 1:
                    logger.warning(
                        "%d documents in '%s' share %s=%s; using '%s'",
                        len(matches),
                        self._definition.collection,
                        self._definition.id_field,
                        business_id,
                        key,
                    )
                return record
        return None

    async def find_all(self) -> list[Record]:
        """Every record in the collection, in store order."""
        children = await self._store.get_children(self._definition.collection)
        records = []
        for key, data in children.items():
            record = self._to_record(key, data)
            if record is not None:
                records.append(record)
        return records

    async def max_business_id(self) -> int:
        ids = [record.business_id for record in await self.find_all()]
        return max((value for value in ids if value is not None), default=0)

    async def next_sequence_value(self, floor: int) -> int:
        """Atomically advance the collection sequence to at least ``floor``."""

        def advance(current: Any) -> int:
            base = current if isinstance(current, int) and not isinstance(current, bool) else 0
            return max(base, floor - 1) + 1

        return await self._store.transaction(self._definition.sequence_path, advance)

    async def upsert_by_key(self, key: str, data: dict[str, Any]) -> Record:
        await self._store.set(self._definition.record_path(key), data)
        return Record(key=key, id_field=self._definition.id_field, data=dict(data))

    async def create_if_absent(self, key: str, data: dict[str, Any]) -> Record:
        """Write ``data`` under ``key`` unless the key already holds a document."""
        path = self._definition.record_path(key)

        def claim(current: Any) -> dict[str, Any]:
            if current is not None:
                raise KeyOccupiedError(path)
            return data

        stored = await self._store.transaction(path, claim)
        return Record(key=key, id_field=self._definition.id_field, data=dict(stored))

    async def guarded_update(
        self,
        record: Record,
        token: str,
        changes: dict[str, Any],
    ) -> Record:
        """Merge ``changes`` into an active record whose lastUpdate equals ``token``.

        The check and the write happen in one store transaction, so a write
        that lands between the caller's read and this call is detected.
        """
        path = self._definition.record_path(record.key)
        label = self._definition.label
        business_id = record.business_id

        def apply(current: Any) -> dict[str, Any]:
            if not isinstance(current, dict) or not current.get(ACTIVE_FIELD):
                raise EntityNotFoundError(label, business_id)
            check_token(token, current.get(LAST_UPDATE_FIELD))
            updated = dict(current)
            updated.update(changes)
            return updated

        stored = await self._store.transaction(path, apply)
        return Record(key=record.key, id_field=self._definition.id_field, data=dict(stored))

    async def remove_by_key(self, key: str) -> None:
        """Physically delete a document. Not reachable over HTTP."""
        await self._store.remove(self._definition.record_path(key))
