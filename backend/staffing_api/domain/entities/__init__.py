from .record import (
    ACTIVE_FIELD,
    LAST_UPDATE_FIELD,
    UPDATED_BY_FIELD,
    SERVER_MANAGED_FIELDS,
    Record,
)
from .resource_definition import (
    FieldFilter,
    FilterKind,
    ForeignKey,
    LinkedCollection,
    ResourceDefinition,
)

__all__ = [
    "ACTIVE_FIELD",
    "LAST_UPDATE_FIELD",
    "UPDATED_BY_FIELD",
    "SERVER_MANAGED_FIELDS",
    "Record",
    "FieldFilter",
    "FilterKind",
    "ForeignKey",
    "LinkedCollection",
    "ResourceDefinition",
]
