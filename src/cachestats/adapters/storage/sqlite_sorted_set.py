"""SQLite sorted-set store adapter."""

from cachestats.adapters.storage.keys import build_key
from cachestats.adapters.storage.sqlite_base import AsyncConnectionManager

_SORTED_SET_SCHEMA = """
CREATE TABLE IF NOT EXISTS sorted_set (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    key TEXT NOT NULL,
    score REAL NOT NULL,
    member TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_sorted_set_key_score ON sorted_set(key, score);
"""

_INSERT_MEMBER = """
INSERT INTO sorted_set (key, score, member) VALUES (?, ?, ?)
"""

_SELECT_RANGE = """
SELECT member, score FROM sorted_set
WHERE key = ? AND score >= ? AND score <= ?
ORDER BY score ASC, id ASC
"""

_DELETE_RANGE = """
DELETE FROM sorted_set WHERE key = ? AND score >= ? AND score <= ?
"""

_COUNT_KEY = """
SELECT COUNT(*) FROM sorted_set WHERE key = ?
"""

_CLEAR = "DELETE FROM sorted_set"


class SQLiteSortedSetStore:
    """SQLite implementation of SortedSetStorePort.

    Stores (key, score, member) rows using aiosqlite for non-blocking async
    operations. Every add inserts a new row, so duplicate scores and duplicate
    members are both kept.

    SQLite failures are raised as StoreError.
    """

    def __init__(self, db_path: str, prefix: str = "") -> None:
        self.prefix = prefix
        self._db_path = db_path
        self._async_manager = AsyncConnectionManager(db_path, _SORTED_SET_SCHEMA)

    def build_key(self, name: str, group: str) -> str:
        """Return the namespaced key for a logical collection."""
        return build_key(self.prefix, name, group)

    async def add_scored(self, key: str, score: float, payload: str) -> None:
        """Add a payload under key with the given score."""
        async with self._async_manager.connection() as db:
            await db.execute(_INSERT_MEMBER, (key, score, payload))
            await db.commit()

    async def range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> list[tuple[str, float]]:
        """Return (payload, score) pairs with min_score <= score <= max_score."""
        async with self._async_manager.connection() as db:
            async with db.execute(_SELECT_RANGE, (key, min_score, max_score)) as cursor:
                return [(row[0], row[1]) async for row in cursor]

    async def remove_range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> int:
        """Remove payloads with min_score <= score <= max_score."""
        async with self._async_manager.connection() as db:
            cursor = await db.execute(_DELETE_RANGE, (key, min_score, max_score))
            removed = cursor.rowcount
            await db.commit()
            return removed

    async def count(self, key: str) -> int:
        """Return the number of payloads stored under key."""
        async with self._async_manager.connection() as db:
            async with db.execute(_COUNT_KEY, (key,)) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def clear(self) -> None:
        """Remove every key from the store."""
        async with self._async_manager.connection() as db:
            await db.execute(_CLEAR)
            await db.commit()

    async def close(self) -> None:
        """Close the persistent connection (for :memory: databases)."""
        await self._async_manager.close()
