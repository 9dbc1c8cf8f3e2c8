"""Firebase Realtime Database implementation of the DocumentStore port.

The Admin SDK is synchronous, so every call runs in a worker thread via
``asyncio.to_thread``. Equality lookups use ``order_by_child().equal_to()``,
which requires an ``.indexOn`` rule for the queried field in the database
rules, e.g. ``{"companies": {".indexOn": ["companyId"]}}``.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError

from staffing_api.application.interfaces import DocumentStore
from staffing_api.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


def _as_children(value: Any) -> dict[str, Any]:
    """Normalize a snapshot into ``{key: child}``.

    The Realtime Database returns a list instead of a dict when a node's
    keys are mostly sequential integers ("0", "1", ...); missing indexes
    come back as None.
    """
    if value is None:
        return {}
    if isinstance(value, list):
        return {str(index): item for index, item in enumerate(value) if item is not None}
    if isinstance(value, dict):
        return dict(value)
    return {}


class FirebaseDocumentStore(DocumentStore):
    """Implements the DocumentStore port on top of ``firebase_admin.db``."""

    def __init__(self, root: db.Reference, app: firebase_admin.App | None = None):
        self._root = root
        self._app = app

    @classmethod
    def from_credentials(
        cls,
        credentials_file: str,
        database_url: str,
        app_name: str = "staffing-api",
    ) -> "FirebaseDocumentStore":
        """Initialize a named Firebase app from a service account key file."""
        cred = credentials.Certificate(credentials_file)
        app = firebase_admin.initialize_app(cred, {"databaseURL": database_url}, name=app_name)
        logger.info("Firebase app '%s' initialized for %s", app_name, database_url)
        return cls(db.reference("/", app=app), app=app)

    def _ref(self, path: str) -> db.Reference:
        return self._root.child(path.strip("/"))

    async def _call(self, operation: str, path: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except FirebaseError as exc:
            logger.error("Firebase %s failed for '%s': %s", operation, path, exc)
            raise StoreError(operation, path, exc) from exc

    async def get(self, path: str) -> Any | None:
        return await self._call("get", path, self._ref(path).get)

    async def get_children(self, path: str) -> dict[str, Any]:
        value = await self._call("get", path, self._ref(path).get)
        return _as_children(value)

    async def find_by_child(self, path: str, child: str, value: Any) -> dict[str, Any]:
        query = self._ref(path).order_by_child(child).equal_to(value)
        result = await self._call("query", path, query.get)
        return _as_children(result)

    async def set(self, path: str, value: Any) -> None:
        await self._call("set", path, self._ref(path).set, value)

    async def update(self, path: str, values: dict[str, Any]) -> None:
        await self._call("update", path, self._ref(path).update, values)

    async def remove(self, path: str) -> None:
        await self._call("remove", path, self._ref(path).delete)

    async def transaction(self, path: str, update_fn: Callable[[Any], Any]) -> Any:
        return await self._call("transaction", path, self._ref(path).transaction, update_fn)

    async def close(self) -> None:
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
