"""Unit tests for the generic ResourceService."""

import re

import pytest

from staffing_api.application.catalog import COMPANIES, LICENSES, STAFF, TRANSFERS, get_resource
from staffing_api.application.services import ListQuery, ResourceService
from staffing_api.config import Settings
from staffing_api.domain.exceptions import (
    EntityNotFoundError,
    ImmutableFieldError,
    PreconditionFailedError,
    PreconditionRequiredError,
)
from staffing_api.infrastructure.dependencies import build_resource_service
from staffing_api.infrastructure.store.memory_store import InMemoryDocumentStore

STAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}:\d{2}")


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(default_user_email="tester@example.com", max_allocation_attempts=5)


def _service(store: InMemoryDocumentStore, settings: Settings, name: str) -> ResourceService:
    return build_resource_service(store, get_resource(name), settings)


@pytest.mark.asyncio
async def test_create_stamps_server_managed_fields(store, settings):
    service = _service(store, settings, COMPANIES.name)

    created = await service.create_record({"companyName": "Acme", "isActive": False, "updatedBy": "x"})

    assert created.record.business_id == 1
    assert created.item["companyId"] == 1
    assert created.item["companyName"] == "Acme"
    assert created.item["isActive"] is True
    assert created.item["updatedBy"] == "tester@example.com"
    assert STAMP_PATTERN.fullmatch(created.item["lastUpdate"])


@pytest.mark.asyncio
async def test_create_rejects_business_id(store, settings):
    service = _service(store, settings, COMPANIES.name)

    with pytest.raises(ImmutableFieldError) as exc_info:
        await service.create_record({"companyId": 5, "companyName": "Acme"})

    assert str(exc_info.value) == "Cannot update companyId"
    assert await store.get("companies") is None


@pytest.mark.asyncio
async def test_get_missing_record_raises(store, settings):
    service = _service(store, settings, COMPANIES.name)
    with pytest.raises(EntityNotFoundError):
        await service.get_record(42)


@pytest.mark.asyncio
async def test_update_requires_token(store, settings):
    service = _service(store, settings, COMPANIES.name)
    await service.create_record({"companyName": "Acme"})

    with pytest.raises(PreconditionRequiredError):
        await service.update_record(1, {"companyName": "Renamed"})


@pytest.mark.asyncio
async def test_update_with_stale_token_changes_nothing(store, settings):
    service = _service(store, settings, COMPANIES.name)
    created = await service.create_record({"companyName": "Acme"})

    with pytest.raises(PreconditionFailedError):
        await service.update_record(1, {"companyName": "Renamed", "lastUpdate": "1999-01-01 00:00:00:00"})

    assert await store.get("companies/1") == created.record.data


@pytest.mark.asyncio
async def test_update_with_current_token(store, settings):
    service = _service(store, settings, COMPANIES.name)
    created = await service.create_record({"companyName": "Acme", "dailyReportCompanyId": 7})
    token = created.item["lastUpdate"]

    updated = await service.update_record(1, {"companyName": "Acme Ltd", "lastUpdate": token})

    assert updated.item["companyName"] == "Acme Ltd"
    assert updated.item["dailyReportCompanyId"] == 7
    assert updated.item["lastUpdate"] != token
    assert updated.item["isActive"] is True


@pytest.mark.asyncio
async def test_update_rejects_business_id_before_touching_store(store, settings):
    service = _service(store, settings, COMPANIES.name)
    created = await service.create_record({"companyName": "Acme"})

    with pytest.raises(ImmutableFieldError):
        await service.update_record(
            1, {"companyId": 2, "lastUpdate": created.item["lastUpdate"]}
        )

    assert await store.get("companies/1") == created.record.data


@pytest.mark.asyncio
async def test_soft_delete_is_terminal(store, settings):
    service = _service(store, settings, COMPANIES.name)
    created = await service.create_record({"companyName": "Acme"})
    token = created.item["lastUpdate"]

    deleted = await service.delete_record(1, token)

    assert deleted.item["isActive"] is False
    assert deleted.item["lastUpdate"] != token

    with pytest.raises(EntityNotFoundError):
        await service.delete_record(1, deleted.item["lastUpdate"])
    with pytest.raises(EntityNotFoundError):
        await service.update_record(1, {"companyName": "Back", "lastUpdate": deleted.item["lastUpdate"]})

    fetched = await service.get_record(1)
    assert fetched.item["isActive"] is False


@pytest.mark.asyncio
async def test_license_embeds_license_type(store, settings):
    types = _service(store, settings, "licenseTypes")
    licenses = _service(store, settings, LICENSES.name)
    await types.create_record({"licenseTypeName": "Crane operator"})

    with_type = await licenses.create_record({"staffId": 1, "licenseTypeId": 1})
    missing_type = await licenses.create_record({"staffId": 1, "licenseTypeId": 9})

    assert with_type.references["licenseType"]["licenseTypeName"] == "Crane operator"
    assert missing_type.references == {"licenseType": None}


@pytest.mark.asyncio
async def test_staff_linked_collections_resolve_on_read(store, settings):
    companies = _service(store, settings, COMPANIES.name)
    categories = _service(store, settings, "jobCategories")
    staff = _service(store, settings, STAFF.name)
    await companies.create_record({"companyName": "Acme"})
    await categories.create_record({"jobCategoryName": "Welder"})

    created = await staff.create_record({
        "staffName": "Taro",
        "companies": [1, 99],
        "jobCategories": [{"jobCategoryId": 1}],
    })

    assert [c["companyName"] for c in created.item["companies"]] == ["Acme"]
    assert [c["jobCategoryName"] for c in created.item["jobCategories"]] == ["Welder"]
    stored = await store.get("staff/1")
    assert stored["companies"] == [1, 99]


@pytest.mark.asyncio
async def test_staff_listing_includes_only_flagged_collections(store, settings):
    staff = _service(store, settings, STAFF.name)
    await _service(store, settings, COMPANIES.name).create_record({"companyName": "Acme"})
    await staff.create_record({
        "staffName": "Taro",
        "companies": [1],
        "licenses": [],
        "attachedDocuments": [],
        "documentTypes": [],
    })

    page = await staff.list_records(ListQuery(), include={"companies", "attached_documents"})

    item = page.items[0]
    assert [c["companyId"] for c in item["companies"]] == [1]
    assert item["attachedDocuments"] == []
    assert item["documentTypes"] == []
    assert "licenses" not in item


@pytest.mark.asyncio
async def test_transfer_listing_collects_distinct_projects(store, settings):
    projects = _service(store, settings, "projects")
    transfers = _service(store, settings, TRANSFERS.name)
    await projects.create_record({"projectName": "Bridge"})
    await projects.create_record({"projectName": "Tunnel"})
    await transfers.create_record({"staffId": 1, "moveOutProject": 1, "moveInProject": 2})
    await transfers.create_record({"staffId": 2, "moveOutProject": 2, "moveInProject": 1})

    page = await transfers.list_records(ListQuery())

    assert page.page.filtered_count == 2
    assert [p["projectName"] for p in page.references["projects"]] == ["Bridge", "Tunnel"]


@pytest.mark.asyncio
async def test_transfer_listing_includes_project_types_of_listed_projects(store, settings):
    project_types = _service(store, settings, "projectTypes")
    projects = _service(store, settings, "projects")
    transfers = _service(store, settings, TRANSFERS.name)
    await project_types.create_record({"projectTypeName": "Civil"})
    await project_types.create_record({"projectTypeName": "Unused"})
    await projects.create_record({"projectName": "Bridge", "projectTypeId": 1})
    await projects.create_record({"projectName": "Tunnel", "projectTypeId": 1})
    await transfers.create_record({"staffId": 1, "moveOutProject": 1, "moveInProject": 2})

    page = await transfers.list_records(ListQuery())

    assert [t["projectTypeName"] for t in page.references["projectTypes"]] == ["Civil"]


@pytest.mark.asyncio
async def test_listing_without_nested_references_adds_no_extra_lists(store, settings):
    licenses = _service(store, settings, LICENSES.name)
    await licenses.create_record({"staffId": 1, "licenseTypeId": 1})

    page = await licenses.list_records(ListQuery())

    assert list(page.references) == ["licenseTypes"]
