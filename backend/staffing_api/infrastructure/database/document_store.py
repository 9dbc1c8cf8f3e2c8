"""DocumentStore implementation backed by a SQLAlchemy document table.

Each ``<collection>/<key>`` document is one row of ``documents`` with its
body in a JSON column. Equality lookups are pushed into SQL as JSON path
predicates, so swapping the Realtime Database for PostgreSQL keeps callers
unchanged. Paths deeper than ``<collection>/<key>`` are not supported.
Transactions are version-checked compare-and-set writes, so they stay
atomic on SQLite, which has no row locks.
"""

import asyncio
import copy
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from staffing_api.application.interfaces import DocumentStore
from staffing_api.domain.exceptions import StoreError
from staffing_api.infrastructure.database.base import Base
from staffing_api.infrastructure.database.models import DocumentModel
from staffing_api.infrastructure.database.session import create_session_factory

logger = logging.getLogger(__name__)

_TRANSACTION_RETRIES = 50


def _locate(path: str) -> tuple[str, str | None]:
    """Split a path into (collection, key); key is None for a whole collection."""
    parts = [part for part in path.strip("/").split("/") if part]
    if not parts or len(parts) > 2:
        raise ValueError(
            f"SQL document store paths are '<collection>' or '<collection>/<key>', got '{path}'"
        )
    return parts[0], parts[1] if len(parts) == 2 else None


def _child_equals(child: str, value: Any):
    """Build a JSON path predicate comparing ``data[child]`` with ``value``."""
    element = DocumentModel.data[child]
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    return element.as_string() == str(value)


class SQLAlchemyDocumentStore(DocumentStore):
    """Implements the DocumentStore port using SQLAlchemy async sessions."""

    def __init__(self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]):
        self._engine = engine
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SQLAlchemyDocumentStore":
        engine, session_factory = create_session_factory(database_url, echo=echo)
        return cls(engine, session_factory)

    async def create_tables(self) -> None:
        """Create the documents table if it does not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # ── Row helpers ──────────────────────────────────────────────────

    async def _fetch_one(
        self,
        session: AsyncSession,
        collection: str,
        key: str,
        for_update: bool = False,
    ) -> DocumentModel | None:
        stmt = select(DocumentModel).where(
            DocumentModel.collection == collection,
            DocumentModel.key == key,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _fetch_collection(self, session: AsyncSession, collection: str) -> list[DocumentModel]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .order_by(DocumentModel.id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def _put(self, session: AsyncSession, collection: str, key: str, value: Any) -> None:
        model = await self._fetch_one(session, collection, key)
        if value is None:
            if model is not None:
                await session.delete(model)
        elif model is None:
            session.add(DocumentModel(collection=collection, key=key, data=value))
        else:
            model.data = value

    # ── DocumentStore port ───────────────────────────────────────────

    async def get(self, path: str) -> Any | None:
        collection, key = _locate(path)
        try:
            async with self._session_factory() as session:
                if key is None:
                    rows = await self._fetch_collection(session, collection)
                    return {row.key: row.data for row in rows} or None
                model = await self._fetch_one(session, collection, key)
                return model.data if model else None
        except SQLAlchemyError as exc:
            raise StoreError("get", path, exc) from exc

    async def get_children(self, path: str) -> dict[str, Any]:
        value = await self.get(path)
        return dict(value) if isinstance(value, dict) else {}

    async def find_by_child(self, path: str, child: str, value: Any) -> dict[str, Any]:
        collection, key = _locate(path)
        if key is not None:
            raise ValueError(f"find_by_child expects a collection path, got '{path}'")
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection, _child_equals(child, value))
            .order_by(DocumentModel.id)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return {row.key: row.data for row in result.scalars().all()}
        except SQLAlchemyError as exc:
            raise StoreError("query", path, exc) from exc

    async def set(self, path: str, value: Any) -> None:
        collection, key = _locate(path)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    if key is not None:
                        await self._put(session, collection, key, value)
                        return
                    await session.execute(
                        delete(DocumentModel).where(DocumentModel.collection == collection)
                    )
                    for child_key, child in (value or {}).items():
                        if child is not None:
                            session.add(DocumentModel(collection=collection, key=child_key, data=child))
        except SQLAlchemyError as exc:
            raise StoreError("set", path, exc) from exc

    async def update(self, path: str, values: dict[str, Any]) -> None:
        collection, key = _locate(path)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    if key is None:
                        for child_key, child in values.items():
                            await self._put(session, collection, child_key, child)
                        return
                    model = await self._fetch_one(session, collection, key, for_update=True)
                    merged = dict(model.data) if model and isinstance(model.data, dict) else {}
                    for field, value in values.items():
                        if value is None:
                            merged.pop(field, None)
                        else:
                            merged[field] = value
                    await self._put(session, collection, key, merged)
        except SQLAlchemyError as exc:
            raise StoreError("update", path, exc) from exc

    async def remove(self, path: str) -> None:
        collection, key = _locate(path)
        stmt = delete(DocumentModel).where(DocumentModel.collection == collection)
        if key is not None:
            stmt = stmt.where(DocumentModel.key == key)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError("remove", path, exc) from exc

    async def transaction(self, path: str, update_fn: Callable[[Any], Any]) -> Any:
        """Read-modify-write one document as a compare-and-set.

        The row is read with ``FOR UPDATE`` where the dialect supports it
        (PostgreSQL). Independently of row locks, the write is conditional
        on the version that was read: a concurrent commit turns the UPDATE
        or DELETE into a ``StaleDataError`` and a concurrent insert into an
        ``IntegrityError``. Either way ``update_fn`` is re-run against the
        fresh value. Exceptions raised by ``update_fn`` abort the write and
        propagate unchanged.
        """
        collection, key = _locate(path)
        if key is None:
            raise ValueError(f"transaction expects a document path, got '{path}'")

        last_error: Exception | None = None
        for attempt in range(1, _TRANSACTION_RETRIES + 1):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        model = await self._fetch_one(session, collection, key, for_update=True)
                        new_value = update_fn(copy.deepcopy(model.data) if model else None)
                        if new_value is None:
                            if model is not None:
                                await session.delete(model)
                        elif model is None:
                            session.add(DocumentModel(collection=collection, key=key, data=new_value))
                        else:
                            model.data = new_value
                            # Forces an UPDATE even when the value is unchanged.
                            model.updated_at = datetime.now(timezone.utc)
                return new_value
            except (IntegrityError, StaleDataError) as exc:
                logger.debug("Transaction on '%s' lost a race (attempt %d)", path, attempt)
                last_error = exc
                await asyncio.sleep(0)
            except SQLAlchemyError as exc:
                raise StoreError("transaction", path, exc) from exc
        raise StoreError("transaction", path, last_error)

    async def close(self) -> None:
        await self._engine.dispose()
