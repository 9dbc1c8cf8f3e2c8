"""Domain entity: declarative description of one CRUD resource.

Every collection in the store is served by the same engine; what differs
between staff, companies, licenses and the reference tables is captured
here: where the documents live, which field holds the business id, which
query parameters filter listings and which fields point at other
collections.
"""

from dataclasses import dataclass
from enum import Enum


class FilterKind(str, Enum):
    """How a listing query parameter is matched against a record field."""

    EQUALS = "equals"       # exact integer match
    CONTAINS = "contains"   # case-insensitive substring
    ANY_OF = "any_of"       # comma-separated integers, match any


@dataclass(frozen=True)
class FieldFilter:
    param: str
    field: str
    kind: FilterKind = FilterKind.EQUALS


@dataclass(frozen=True)
class ForeignKey:
    """A single id field resolved into the referenced record on responses.

    ``key`` names the embedded record on single-record responses;
    ``list_key`` names the list of distinct referenced records on listings.
    """

    field: str
    resource: str
    key: str
    list_key: str


@dataclass(frozen=True)
class LinkedCollection:
    """A list of ids (or ``{<idField>: n}`` objects) resolved into records.

    ``include_param`` is the listing flag that must equal ``"true"`` for the
    field to appear in list responses.
    """

    field: str
    resource: str
    include_param: str


@dataclass(frozen=True)
class ResourceDefinition:
    name: str
    collection: str
    id_field: str
    item_key: str
    list_key: str
    label: str
    filters: tuple[FieldFilter, ...] = ()
    foreign_keys: tuple[ForeignKey, ...] = ()
    linked_collections: tuple[LinkedCollection, ...] = ()

    @property
    def sequence_path(self) -> str:
        return f"_sequences/{self.collection}"

    def record_path(self, key: str) -> str:
        return f"{self.collection}/{key}"
