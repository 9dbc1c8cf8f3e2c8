"""In-memory filtering and pagination of a collection scan."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from staffing_api.domain.entities import FieldFilter, FilterKind, Record

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20


def parse_active_only(raw: str | None) -> bool:
    """Listings hide inactive records unless the caller sends exactly ``"false"``."""
    return raw != "false"


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except (TypeError, ValueError):
        return None


def _parse_int_list(raw: str) -> set[int]:
    values = set()
    for part in raw.split(","):
        value = _parse_int(part)
        if value is not None:
            values.add(value)
    return values


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class ListQuery:
    """Parsed listing parameters. ``filters`` maps query param name to raw value."""

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    active_only: bool = True
    filters: dict[str, str] = field(default_factory=dict)


@dataclass
class Page:
    page: int
    per_page: int
    filtered_count: int
    items: list[Record]


def _build_predicate(field_filter: FieldFilter, raw: str):
    """Return a record predicate for one filter, or None when the value is unusable."""
    name = field_filter.field

    if field_filter.kind is FilterKind.CONTAINS:
        needle = raw.lower()
        if not needle:
            return None

        def contains(record: Record) -> bool:
            value = record.data.get(name)
            return isinstance(value, str) and needle in value.lower()

        return contains

    if field_filter.kind is FilterKind.ANY_OF:
        wanted = _parse_int_list(raw)
        if not wanted:
            return None
        return lambda record: _is_int(record.data.get(name)) and record.data.get(name) in wanted

    expected = _parse_int(raw)
    if expected is None:
        return None
    return lambda record: _is_int(record.data.get(name)) and record.data.get(name) == expected


def filter_and_paginate(
    records: Iterable[Record],
    query: ListQuery,
    filters: Iterable[FieldFilter] = (),
) -> Page:
    """Apply the active flag and every supplied filter, then slice one page.

    Filters are conjunctive and keep the input order. Integer filters
    whose value does not parse are ignored rather than rejected.
    """
    predicates = []
    for field_filter in filters:
        raw = query.filters.get(field_filter.param)
        if raw is None:
            continue
        predicate = _build_predicate(field_filter, raw)
        if predicate is not None:
            predicates.append(predicate)

    matched = [
        record
        for record in records
        if (not query.active_only or record.is_active)
        and all(predicate(record) for predicate in predicates)
    ]

    start = (query.page - 1) * query.per_page
    return Page(
        page=query.page,
        per_page=query.per_page,
        filtered_count=len(matched),
        items=matched[start:start + query.per_page],
    )


def collect_filter_values(
    params: Mapping[str, str],
    filters: Iterable[FieldFilter],
) -> dict[str, str]:
    """Pick the raw values of the declared filter params out of a query string."""
    return {f.param: params[f.param] for f in filters if f.param in params}
