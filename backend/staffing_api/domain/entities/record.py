"""Domain entity: one stored document of a resource collection."""

from dataclasses import dataclass, field
from typing import Any

ACTIVE_FIELD = "isActive"
LAST_UPDATE_FIELD = "lastUpdate"
UPDATED_BY_FIELD = "updatedBy"

SERVER_MANAGED_FIELDS = frozenset({ACTIVE_FIELD, LAST_UPDATE_FIELD, UPDATED_BY_FIELD})


@dataclass
class Record:
    """A resource document together with the storage key it lives under.

    The storage key is opaque: it is usually the stringified business id,
    but records written by other tools may use any key, so identity is
    always the ``id_field`` value inside ``data``.
    """

    key: str
    id_field: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def business_id(self) -> int | None:
        value = self.data.get(self.id_field)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    @property
    def is_active(self) -> bool:
        return bool(self.data.get(ACTIVE_FIELD))

    @property
    def last_update(self) -> str | None:
        return self.data.get(LAST_UPDATE_FIELD)

    def to_dict(self) -> dict[str, Any]:
        """Response representation: the document with its business id first."""
        payload = {self.id_field: self.business_id}
        payload.update(self.data)
        return payload
