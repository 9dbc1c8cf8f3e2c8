"""Unit tests for listing filters and pagination."""

from staffing_api.application.catalog import COMPANIES, LICENSES, STAFF
from staffing_api.application.services import (
    ListQuery,
    collect_filter_values,
    filter_and_paginate,
    parse_active_only,
)
from staffing_api.domain.entities import Record


def _company(company_id: int, name: str, active: bool = True) -> Record:
    return Record(
        key=str(company_id),
        id_field="companyId",
        data={"companyId": company_id, "companyName": name, "isActive": active},
    )


def _companies() -> list[Record]:
    return [
        _company(1, "Acme"),
        _company(2, "Beta Construction"),
        _company(3, "ACME Logistics"),
        _company(4, "Gamma", active=False),
        _company(5, "Delta"),
        _company(6, "Epsilon"),
    ]


def _ids(records: list[Record]) -> list[int]:
    return [record.business_id for record in records]


def test_active_only_parsing():
    assert parse_active_only(None) is True
    assert parse_active_only("true") is True
    assert parse_active_only("False") is True
    assert parse_active_only("false") is False


def test_default_listing_excludes_inactive_records():
    page = filter_and_paginate(_companies(), ListQuery(), COMPANIES.filters)
    assert _ids(page.items) == [1, 2, 3, 5, 6]
    assert page.filtered_count == 5


def test_inactive_records_included_when_requested():
    page = filter_and_paginate(_companies(), ListQuery(active_only=False), COMPANIES.filters)
    assert _ids(page.items) == [1, 2, 3, 4, 5, 6]


def test_second_page_of_two():
    page = filter_and_paginate(_companies(), ListQuery(page=2, per_page=2), COMPANIES.filters)
    assert _ids(page.items) == [3, 5]
    assert page.page == 2
    assert page.per_page == 2
    assert page.filtered_count == 5


def test_page_beyond_range_is_empty():
    page = filter_and_paginate(_companies(), ListQuery(page=10, per_page=2), COMPANIES.filters)
    assert page.items == []
    assert page.filtered_count == 5


def test_contains_filter_is_case_insensitive():
    query = ListQuery(filters={"company_name": "acme"})
    page = filter_and_paginate(_companies(), query, COMPANIES.filters)
    assert _ids(page.items) == [1, 3]


def test_filters_are_conjunctive():
    query = ListQuery(filters={"company_name": "acme", "company_id": "3"})
    page = filter_and_paginate(_companies(), query, COMPANIES.filters)
    assert _ids(page.items) == [3]


def test_unparsable_integer_filter_is_ignored():
    query = ListQuery(filters={"company_id": "abc"})
    page = filter_and_paginate(_companies(), query, COMPANIES.filters)
    assert page.filtered_count == 5


def test_integer_filter_does_not_match_string_fields():
    records = [
        Record(key="a", id_field="staffId", data={"staffId": 1, "companyId": "2", "isActive": True}),
        Record(key="b", id_field="staffId", data={"staffId": 2, "companyId": 2, "isActive": True}),
    ]
    page = filter_and_paginate(records, ListQuery(filters={"company_id": "2"}), STAFF.filters)
    assert _ids(page.items) == [2]


def test_any_of_filter_matches_comma_separated_ids():
    records = [
        Record(key=str(n), id_field="licenseId", data={"licenseId": n, "staffId": n % 3, "isActive": True})
        for n in range(1, 7)
    ]
    query = ListQuery(filters={"staff_id": "1, 2,x"})
    page = filter_and_paginate(records, query, LICENSES.filters)
    assert _ids(page.items) == [1, 2, 4, 5]


def test_undeclared_params_are_not_collected():
    params = {"company_name": "acme", "page": "2", "unknown": "1"}
    assert collect_filter_values(params, COMPANIES.filters) == {"company_name": "acme"}
