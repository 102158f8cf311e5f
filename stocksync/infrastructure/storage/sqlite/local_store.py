"""SQLite implementation of the local (offline) cache."""

import json
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from stocksync.config import get_logger
from stocksync.core.entities.sync import Collection, PendingMutation
from stocksync.core.exceptions import DatabaseError
from stocksync.core.interfaces.local_store import ILocalStore
from stocksync.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool

logger = get_logger(__name__)

COLLECTION_KEYS: dict[Collection, str] = {
    Collection.PRODUCTS: "stock_products",
    Collection.MOVEMENTS: "stock_movements",
    Collection.ORDERS: "stock_orders",
}
QUEUE_KEY = "stock_sync_queue"


class SQLiteLocalStore(ILocalStore):
    """
    Key-value cache over a single SQLite table.

    Each key holds one JSON-serialized ordered list; writers always replace
    the whole value.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = await get_pool()
        return self._pool

    async def read_collection(self, collection: Collection) -> list[dict[str, Any]]:
        """Read a whole collection, in stored order."""
        return await self._read(COLLECTION_KEYS[collection])

    async def write_collection(
        self, collection: Collection, records: list[dict[str, Any]]
    ) -> None:
        """Replace a whole collection."""
        await self._write(COLLECTION_KEYS[collection], records)
        logger.debug(
            "local_collection_written",
            collection=collection.value,
            count=len(records),
        )

    async def clear_collection(self, collection: Collection) -> None:
        """Remove a collection key entirely."""
        await self._delete(COLLECTION_KEYS[collection])
        logger.info("local_collection_cleared", collection=collection.value)

    async def read_queue(self) -> list[PendingMutation]:
        """Read the pending-mutation queue in enqueue order."""
        raw = await self._read(QUEUE_KEY)
        return [PendingMutation.model_validate(item) for item in raw]

    async def write_queue(self, items: list[PendingMutation]) -> None:
        """Replace the queue; an empty list removes the queue key."""
        if not items:
            await self._delete(QUEUE_KEY)
            return
        await self._write(QUEUE_KEY, [item.model_dump(mode="json") for item in items])

    async def has_queue(self) -> bool:
        """True when a queue key is stored."""
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT 1 FROM local_collections WHERE key = ?", (QUEUE_KEY,)
                )
                return await cursor.fetchone() is not None
        except aiosqlite.Error as e:
            raise DatabaseError("has_queue", str(e)) from e

    async def _read(self, key: str) -> list[Any]:
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT value FROM local_collections WHERE key = ?", (key,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError(f"read {key}", str(e)) from e

        if row is None:
            return []
        try:
            value = json.loads(row["value"])
        except json.JSONDecodeError as e:
            logger.error("local_value_corrupt", key=key, error=str(e))
            raise DatabaseError(f"decode {key}", str(e)) from e
        return value if isinstance(value, list) else []

    async def _write(self, key: str, value: list[Any]) -> None:
        pool = await self._get_pool()
        payload = json.dumps(value, ensure_ascii=False, default=str)
        try:
            async with pool.transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO local_collections (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, payload, datetime.now(UTC).isoformat()),
                )
        except aiosqlite.Error as e:
            raise DatabaseError(f"write {key}", str(e)) from e

    async def _delete(self, key: str) -> None:
        pool = await self._get_pool()
        try:
            async with pool.transaction() as conn:
                await conn.execute("DELETE FROM local_collections WHERE key = ?", (key,))
        except aiosqlite.Error as e:
            raise DatabaseError(f"delete {key}", str(e)) from e
