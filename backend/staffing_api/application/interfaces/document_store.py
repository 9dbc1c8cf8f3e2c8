"""Abstract document store interface (port) for hierarchical JSON storage."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class DocumentStore(ABC):
    """Port for a path-addressed JSON tree, implemented in the infrastructure layer.

    Paths are slash-separated (``"companies/3"``). A collection is a path whose
    children are documents keyed by an opaque storage key. Implementations
    raise ``StoreError`` for I/O failures and let every other exception raised
    by a transaction callback propagate unchanged.
    """

    @abstractmethod
    async def get(self, path: str) -> Any | None:
        """Return the value stored at ``path`` or None."""
        ...

    @abstractmethod
    async def get_children(self, path: str) -> dict[str, Any]:
        """Return every child of ``path`` keyed by storage key, in store order."""
        ...

    @abstractmethod
    async def find_by_child(self, path: str, child: str, value: Any) -> dict[str, Any]:
        """Indexed equality query: children of ``path`` whose ``child`` field equals ``value``."""
        ...

    @abstractmethod
    async def set(self, path: str, value: Any) -> None:
        """Replace the value at ``path``."""
        ...

    @abstractmethod
    async def update(self, path: str, values: dict[str, Any]) -> None:
        """Merge ``values`` into the object at ``path``."""
        ...

    @abstractmethod
    async def remove(self, path: str) -> None:
        """Delete ``path`` and everything below it."""
        ...

    @abstractmethod
    async def transaction(self, path: str, update_fn: Callable[[Any], Any]) -> Any:
        """Atomically replace the value at ``path`` with ``update_fn(current)``.

        ``update_fn`` receives the current value (None when absent) and
        returns the new one. It may be called more than once when the
        backend retries on contention, so it must be free of side effects.
        Returns the committed value.
        """
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
