"""Abstract repository interface (port) for the records of one resource."""

from abc import ABC, abstractmethod
from typing import Any

from staffing_api.domain.entities import Record, ResourceDefinition


class ResourceRepository(ABC):
    """Port for one collection's records, implemented in the infrastructure layer.

    Records are identified by their business-id field; storage keys only
    address a document once it has been found.
    """

    @property
    @abstractmethod
    def definition(self) -> ResourceDefinition:
        """The resource this repository reads and writes."""
        ...

    @abstractmethod
    async def find_by_business_id(self, business_id: int) -> Record | None:
        """Return the record whose id field equals ``business_id``, active or not."""
        ...

    @abstractmethod
    async def find_all(self) -> list[Record]:
        """Return every record in the collection, in store order."""
        ...

    @abstractmethod
    async def max_business_id(self) -> int:
        """Return the largest business id in use, or 0 for an empty collection."""
        ...

    @abstractmethod
    async def next_sequence_value(self, floor: int) -> int:
        """Atomically advance the collection sequence to at least ``floor`` and return it."""
        ...

    @abstractmethod
    async def upsert_by_key(self, key: str, data: dict[str, Any]) -> Record:
        """Replace the document stored under ``key``."""
        ...

    @abstractmethod
    async def create_if_absent(self, key: str, data: dict[str, Any]) -> Record:
        """Write ``data`` under ``key``; raises ``KeyOccupiedError`` if it is taken."""
        ...

    @abstractmethod
    async def guarded_update(self, record: Record, token: str, changes: dict[str, Any]) -> Record:
        """Merge ``changes`` into ``record`` if its stored lastUpdate still equals ``token``.

        Raises ``EntityNotFoundError`` when the record is gone or inactive and
        ``PreconditionFailedError`` when the token is stale. The check and the
        write are atomic.
        """
        ...

    @abstractmethod
    async def remove_by_key(self, key: str) -> None:
        """Physically delete the document stored under ``key``."""
        ...
