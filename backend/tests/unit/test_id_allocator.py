"""Unit tests for sequential business-id allocation."""

import asyncio
from typing import Any

import pytest

from staffing_api.application.catalog import COMPANIES
from staffing_api.application.services import IdAllocator
from staffing_api.domain.exceptions import AllocationExhaustedError
from staffing_api.infrastructure.repositories import DocumentResourceRepository
from staffing_api.infrastructure.store.memory_store import InMemoryDocumentStore


class AlwaysTakenStore(InMemoryDocumentStore):
    """Reports every candidate id as already in use."""

    async def find_by_child(self, path: str, child: str, value: Any) -> dict[str, Any]:
        return {"elsewhere": {child: value}}


def _allocator(store: InMemoryDocumentStore, max_attempts: int = 10) -> IdAllocator:
    return IdAllocator(DocumentResourceRepository(store, COMPANIES), max_attempts=max_attempts)


@pytest.mark.asyncio
async def test_sequential_creates_start_at_one():
    store = InMemoryDocumentStore()
    allocator = _allocator(store)

    ids = []
    for name in ("A", "B", "C"):
        record = await allocator.allocate_and_create({"companyName": name})
        ids.append(record.business_id)

    assert ids == [1, 2, 3]
    assert (await store.get("companies/2"))["companyName"] == "B"


@pytest.mark.asyncio
async def test_preseeded_collection_continues_after_max():
    store = InMemoryDocumentStore({
        "companies": {
            "4": {"companyId": 4, "companyName": "Four"},
            "11": {"companyId": 11, "companyName": "Eleven"},
        }
    })

    record = await _allocator(store).allocate_and_create({"companyName": "Next"})

    assert record.business_id == 12
    assert record.key == "12"


@pytest.mark.asyncio
async def test_occupied_storage_key_is_skipped():
    store = InMemoryDocumentStore({"companies": {"1": {"companyName": "No id field"}}})

    record = await _allocator(store).allocate_and_create({"companyName": "New"})

    assert record.business_id == 2
    assert await store.get("companies/1") == {"companyName": "No id field"}


@pytest.mark.asyncio
async def test_parallel_creates_receive_unique_ids():
    store = InMemoryDocumentStore()
    allocator = _allocator(store)

    records = await asyncio.gather(
        *(allocator.allocate_and_create({"companyName": f"C{n}"}) for n in range(20))
    )

    ids = sorted(record.business_id for record in records)
    assert ids == list(range(1, 21))
    assert len(await store.get_children("companies")) == 20


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts():
    store = AlwaysTakenStore()

    with pytest.raises(AllocationExhaustedError) as exc_info:
        await _allocator(store, max_attempts=3).allocate_and_create({"companyName": "Never"})

    assert exc_info.value.attempts == 3
    assert await store.get("companies") is None
    assert await store.get("_sequences/companies") == 3
