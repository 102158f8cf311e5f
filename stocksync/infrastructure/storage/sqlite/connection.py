"""
SQLite access for the local cache.

Reads go through a small queue of connections; every write goes through
one writer connection behind a lock, so collection replacements commit
one at a time.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from stocksync.config import get_logger, get_settings
from stocksync.infrastructure.storage.sqlite.schema import ensure_schema

logger = get_logger(__name__)


class ConnectionPool:
    """Reader connections plus a single writer for the cache database."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 2,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = max(pool_size, 1)
        self.busy_timeout = busy_timeout

        self._readers: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._writer: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()
        self._open_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._writer is not None

    async def initialize(self) -> None:
        """Open the writer, bootstrap the schema, then open the readers."""
        async with self._open_lock:
            if self._writer is not None:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            writer = await self._connect()
            await ensure_schema(writer)
            for _ in range(self.pool_size):
                self._readers.put_nowait(await self._connect())
            self._writer = writer

            logger.info(
                "cache_database_opened",
                db_path=str(self.db_path),
                readers=self.pool_size,
            )

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a reader connection."""
        if not self.initialized:
            await self.initialize()

        conn = await self._readers.get()
        try:
            yield conn
        finally:
            self._readers.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Hold the writer; commit on success, roll back on error."""
        if not self.initialized:
            await self.initialize()

        async with self._write_lock:
            conn = self._writer
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def close(self) -> None:
        async with self._open_lock:
            if self._writer is None:
                return
            async with self._write_lock:
                await self._writer.close()
                self._writer = None
            while not self._readers.empty():
                await self._readers.get_nowait().close()
            logger.info("cache_database_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Shared cache database for the configured storage settings."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
