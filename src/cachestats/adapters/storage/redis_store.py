"""Redis sorted-set store adapter."""

from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from cachestats.adapters.storage.keys import build_key
from cachestats.core.errors import StoreError


def _decode(member: Any) -> str:
    if isinstance(member, bytes):
        return member.decode("utf-8", errors="replace")
    return str(member)


class RedisSortedSetStore:
    """Redis implementation of SortedSetStorePort.

    Wraps a redis.asyncio client and maps the port onto ZADD,
    ZRANGEBYSCORE and ZREMRANGEBYSCORE. Redis sorted sets deduplicate
    identical members, so callers must make payloads unique (snapshot
    payloads carry their id for that reason).

    Redis failures are raised as StoreError.
    """

    def __init__(self, client: redis.Redis, prefix: str = "") -> None:
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(
        cls, url: str, prefix: str = "", **kwargs: Any
    ) -> "RedisSortedSetStore":
        """Create a store from a redis:// URL.

        Args:
            url: Redis connection URL.
            prefix: Key prefix for namespacing.
            **kwargs: Extra options passed to redis.asyncio.Redis.from_url
                (e.g. socket_timeout).
        """
        return cls(redis.Redis.from_url(url, **kwargs), prefix=prefix)

    def build_key(self, name: str, group: str) -> str:
        """Return the namespaced key for a logical collection."""
        return build_key(self.prefix, name, group)

    async def add_scored(self, key: str, score: float, payload: str) -> None:
        """Add a payload under key with the given score."""
        try:
            await self.client.zadd(key, {payload: score})
        except RedisError as e:
            raise StoreError(f"ZADD {key} failed: {e}") from e

    async def range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> list[tuple[str, float]]:
        """Return (payload, score) pairs with min_score <= score <= max_score."""
        try:
            rows = await self.client.zrangebyscore(
                key, min_score, max_score, withscores=True
            )
        except RedisError as e:
            raise StoreError(f"ZRANGEBYSCORE {key} failed: {e}") from e
        return [(_decode(member), float(score)) for member, score in rows]

    async def remove_range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> int:
        """Remove payloads with min_score <= score <= max_score."""
        try:
            removed = await self.client.zremrangebyscore(key, min_score, max_score)
        except RedisError as e:
            raise StoreError(f"ZREMRANGEBYSCORE {key} failed: {e}") from e
        return int(removed)

    async def ping(self) -> bool:
        """Return True if the Redis server answers."""
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the underlying client."""
        await self.client.aclose()
