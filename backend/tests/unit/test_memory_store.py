"""Unit tests for the in-memory document store."""

import pytest

from staffing_api.infrastructure.store.memory_store import InMemoryDocumentStore


@pytest.mark.asyncio
async def test_set_then_get_returns_a_copy():
    store = InMemoryDocumentStore()
    await store.set("companies/1", {"companyId": 1, "tags": ["a"]})

    value = await store.get("companies/1")
    value["tags"].append("b")

    assert await store.get("companies/1") == {"companyId": 1, "tags": ["a"]}


@pytest.mark.asyncio
async def test_update_merges_and_none_removes_fields():
    store = InMemoryDocumentStore({"companies": {"1": {"a": 1, "b": 2}}})

    await store.update("companies/1", {"b": None, "c": 3})

    assert await store.get("companies/1") == {"a": 1, "c": 3}


@pytest.mark.asyncio
async def test_find_by_child_keeps_booleans_and_numbers_apart():
    store = InMemoryDocumentStore({
        "items": {
            "a": {"flag": True},
            "b": {"flag": 1},
        }
    })

    assert list(await store.find_by_child("items", "flag", 1)) == ["b"]
    assert list(await store.find_by_child("items", "flag", True)) == ["a"]


@pytest.mark.asyncio
async def test_transaction_exception_leaves_value_untouched():
    store = InMemoryDocumentStore({"counters": {"x": 5}})

    def explode(current):
        raise RuntimeError("abort")

    with pytest.raises(RuntimeError):
        await store.transaction("counters/x", explode)

    assert await store.get("counters/x") == 5


@pytest.mark.asyncio
async def test_transaction_returning_none_deletes():
    store = InMemoryDocumentStore({"counters": {"x": 5}})

    await store.transaction("counters/x", lambda current: None)

    assert await store.get("counters") == {}


@pytest.mark.asyncio
async def test_remove_and_children_of_missing_path():
    store = InMemoryDocumentStore({"companies": {"1": {"companyId": 1}}})

    await store.remove("companies/1")

    assert await store.get("companies/1") is None
    assert await store.get_children("nothing/here") == {}


@pytest.mark.asyncio
async def test_empty_path_is_rejected():
    store = InMemoryDocumentStore()
    with pytest.raises(ValueError):
        await store.get("/")
