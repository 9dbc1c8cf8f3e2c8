"""Sequential business-id allocation with bounded retry."""

import logging
from typing import Any

from staffing_api.application.interfaces import ResourceRepository
from staffing_api.domain.entities import Record
from staffing_api.domain.exceptions import AllocationExhaustedError, KeyOccupiedError

logger = logging.getLogger(__name__)


class IdAllocator:
    """Reserves the next unused business id of a collection and creates the record.

    Candidates come from an atomic per-collection sequence that never
    falls below ``max(existing id) + 1``. A candidate that is already taken
    (a record written outside the sequence) or whose storage key is
    occupied is skipped, up to ``max_attempts`` times.
    """

    def __init__(self, repository: ResourceRepository, max_attempts: int = 10):
        self._repository = repository
        self._max_attempts = max_attempts

    async def allocate_and_create(self, fields: dict[str, Any]) -> Record:
        definition = self._repository.definition
        floor = await self._repository.max_business_id() + 1

        for attempt in range(1, self._max_attempts + 1):
            candidate = await self._repository.next_sequence_value(floor)

            if await self._repository.find_by_business_id(candidate) is not None:
                logger.warning(
                    "%s=%d already taken in '%s' (attempt %d/%d)",
                    definition.id_field,
                    candidate,
                    definition.collection,
                    attempt,
                    self._max_attempts,
                )
                continue

            document = {definition.id_field: candidate, **fields}
            try:
                record = await self._repository.create_if_absent(str(candidate), document)
            except KeyOccupiedError:
                logger.warning(
                    "Storage key '%s' occupied in '%s' (attempt %d/%d)",
                    candidate,
                    definition.collection,
                    attempt,
                    self._max_attempts,
                )
                continue

            logger.info("Created %s %s=%d", definition.label, definition.id_field, candidate)
            return record

        logger.error(
            "Giving up allocating an id in '%s' after %d attempts",
            definition.collection,
            self._max_attempts,
        )
        raise AllocationExhaustedError(definition.collection, self._max_attempts)
