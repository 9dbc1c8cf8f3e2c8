"""In-memory DocumentStore on a nested dict tree, for tests and local development."""

import asyncio
import copy
from collections.abc import Callable
from typing import Any

from staffing_api.application.interfaces import DocumentStore


def _split(path: str) -> list[str]:
    parts = [part for part in path.strip("/").split("/") if part]
    if not parts:
        raise ValueError("Document store paths must name at least one segment")
    return parts


def _same_value(left: Any, right: Any) -> bool:
    """Equality that keeps booleans and numbers apart, like the Firebase query engine."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


class InMemoryDocumentStore(DocumentStore):
    """Implements the DocumentStore port on a plain dict.

    Every operation yields to the event loop before touching the tree so
    concurrent requests interleave the way they would against a remote
    store. Transactions hold an asyncio lock for the read-modify-write.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._root: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._lock = asyncio.Lock()

    def _read(self, parts: list[str]) -> Any | None:
        node: Any = self._root
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _write(self, parts: list[str], value: Any) -> None:
        if value is None:
            self._delete(parts)
            return
        node = self._root
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = copy.deepcopy(value)

    def _delete(self, parts: list[str]) -> None:
        parent = self._read(parts[:-1]) if len(parts) > 1 else self._root
        if isinstance(parent, dict):
            parent.pop(parts[-1], None)

    async def get(self, path: str) -> Any | None:
        await asyncio.sleep(0)
        return copy.deepcopy(self._read(_split(path)))

    async def get_children(self, path: str) -> dict[str, Any]:
        await asyncio.sleep(0)
        node = self._read(_split(path))
        if not isinstance(node, dict):
            return {}
        return copy.deepcopy(node)

    async def find_by_child(self, path: str, child: str, value: Any) -> dict[str, Any]:
        children = await self.get_children(path)
        return {
            key: document
            for key, document in children.items()
            if isinstance(document, dict) and _same_value(document.get(child), value)
        }

    async def set(self, path: str, value: Any) -> None:
        await asyncio.sleep(0)
        self._write(_split(path), value)

    async def update(self, path: str, values: dict[str, Any]) -> None:
        await asyncio.sleep(0)
        parts = _split(path)
        current = self._read(parts)
        merged = dict(current) if isinstance(current, dict) else {}
        for field, value in values.items():
            if value is None:
                merged.pop(field, None)
            else:
                merged[field] = value
        self._write(parts, merged)

    async def remove(self, path: str) -> None:
        await asyncio.sleep(0)
        self._delete(_split(path))

    async def transaction(self, path: str, update_fn: Callable[[Any], Any]) -> Any:
        parts = _split(path)
        async with self._lock:
            await asyncio.sleep(0)
            new_value = update_fn(copy.deepcopy(self._read(parts)))
            self._write(parts, new_value)
            return copy.deepcopy(new_value)
