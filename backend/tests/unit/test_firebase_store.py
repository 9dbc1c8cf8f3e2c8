"""Unit tests for the Firebase adapter, with the Admin SDK mocked out."""

from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import exceptions as firebase_exceptions

from staffing_api.domain.exceptions import StoreError
from staffing_api.infrastructure.store.firebase_store import FirebaseDocumentStore


def _store_with_ref(ref: MagicMock) -> tuple[FirebaseDocumentStore, MagicMock]:
    root = MagicMock()
    root.child.return_value = ref
    return FirebaseDocumentStore(root), root


@pytest.mark.asyncio
async def test_get_strips_slashes_from_path():
    ref = MagicMock()
    ref.get.return_value = {"companyId": 1}
    store, root = _store_with_ref(ref)

    assert await store.get("/companies/1/") == {"companyId": 1}
    root.child.assert_called_once_with("companies/1")


@pytest.mark.asyncio
async def test_get_children_normalizes_array_snapshots():
    ref = MagicMock()
    ref.get.return_value = [None, {"companyId": 1}, {"companyId": 2}]
    store, _ = _store_with_ref(ref)

    children = await store.get_children("companies")

    assert children == {"1": {"companyId": 1}, "2": {"companyId": 2}}


@pytest.mark.asyncio
async def test_find_by_child_uses_ordered_equality_query():
    ref = MagicMock()
    query = ref.order_by_child.return_value.equal_to.return_value
    query.get.return_value = {"3": {"companyId": 3}}
    store, _ = _store_with_ref(ref)

    result = await store.find_by_child("companies", "companyId", 3)

    assert result == {"3": {"companyId": 3}}
    ref.order_by_child.assert_called_once_with("companyId")
    ref.order_by_child.return_value.equal_to.assert_called_once_with(3)


@pytest.mark.asyncio
async def test_writes_are_delegated_to_the_reference():
    ref = MagicMock()
    store, _ = _store_with_ref(ref)

    await store.set("companies/1", {"companyId": 1})
    await store.update("companies/1", {"companyName": "Acme"})
    await store.remove("companies/1")

    ref.set.assert_called_once_with({"companyId": 1})
    ref.update.assert_called_once_with({"companyName": "Acme"})
    ref.delete.assert_called_once_with()


@pytest.mark.asyncio
async def test_transaction_passes_callback_and_returns_committed_value():
    ref = MagicMock()
    ref.transaction.side_effect = lambda fn: fn(4)
    store, _ = _store_with_ref(ref)

    assert await store.transaction("_sequences/companies", lambda current: current + 1) == 5


@pytest.mark.asyncio
async def test_firebase_errors_become_store_errors():
    ref = MagicMock()
    ref.get.side_effect = firebase_exceptions.UnavailableError("backend down")
    store, _ = _store_with_ref(ref)

    with pytest.raises(StoreError) as exc_info:
        await store.get("companies")

    assert exc_info.value.operation == "get"
    assert isinstance(exc_info.value.cause, firebase_exceptions.UnavailableError)


@pytest.mark.asyncio
async def test_callback_errors_propagate_unchanged():
    ref = MagicMock()
    ref.transaction.side_effect = lambda fn: fn(None)
    store, _ = _store_with_ref(ref)

    def refuse(current):
        raise KeyError("taken")

    with pytest.raises(KeyError):
        await store.transaction("companies/1", refuse)


@pytest.mark.asyncio
async def test_close_deletes_the_firebase_app():
    app = MagicMock()
    store = FirebaseDocumentStore(MagicMock(), app=app)

    with patch("firebase_admin.delete_app") as delete_app:
        await store.close()
        await store.close()

    delete_app.assert_called_once_with(app)
