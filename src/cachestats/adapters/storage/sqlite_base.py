"""Connection management for the SQLite sorted-set store."""

import asyncio
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

from cachestats.core.errors import StoreError

MEMORY_DB = ":memory:"


class AsyncConnectionManager:
    """Hands out aiosqlite connections with the schema in place.

    :memory: databases are connection-scoped in SQLite, so a single persistent
    connection is kept for them. File databases get a fresh connection per
    use, opened in WAL mode.
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._schema = schema
        self._ready = False
        self._init_lock: asyncio.Lock | None = None
        self._memory_conn: aiosqlite.Connection | None = None

    @property
    def is_memory(self) -> bool:
        return self._db_path == MEMORY_DB

    def _lock(self) -> asyncio.Lock:
        # Created lazily so the lock binds to the running event loop.
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        return self._init_lock

    async def _initialize(self) -> None:
        if self._ready:
            return
        async with self._lock():
            if self._ready:
                return
            if self.is_memory:
                self._memory_conn = await aiosqlite.connect(MEMORY_DB)
                await self._memory_conn.executescript(self._schema)
            else:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("PRAGMA journal_mode=WAL")
                    await db.executescript(self._schema)
            self._ready = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection, translating SQLite failures into StoreError."""
        try:
            await self._initialize()
            if self.is_memory:
                if self._memory_conn is None:
                    raise StoreError("memory database connection not initialized")
                db = self._memory_conn
            else:
                db = await aiosqlite.connect(self._db_path)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {self._db_path}: {e}") from e
        try:
            yield db
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            if not self.is_memory:
                await db.close()

    async def close(self) -> None:
        """Close the persistent :memory: connection, if any."""
        if self._memory_conn is not None:
            await self._memory_conn.close()
            self._memory_conn = None
            self._ready = False
