"""Example ASGI application recording cache statistics per request.

Run with:
    REDIS_URL=redis://localhost:6379/0 uvicorn examples.asgi_example:app

Endpoints:
    /              - Does some cache work and returns "OK"
    /stats         - JSON list of snapshots from the last hour

Configuration:
    DISABLE_METRICS=1      - turn recording off
    METRICS_MAX_TIME=600   - keep ten minutes of snapshots
"""

import json
import os

from cachestats import (
    CacheMetrics,
    CacheMetricsMiddleware,
    CacheStats,
    EmbeddedRuntime,
    MetricsConfig,
    RedisSortedSetStore,
)


class CountingCache:
    """Toy object cache that counts its own hits and misses."""

    def __init__(self, store: RedisSortedSetStore) -> None:
        self._store = store
        self._data: dict[str, bytes] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> bytes | None:
        if key in self._data:
            self.hits += 1
            return self._data[key]
        self.misses += 1
        return None

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = value

    def is_ready(self) -> bool:
        return True

    def info(self) -> CacheStats:
        total = self.hits + self.misses
        return CacheStats(
            hits=self.hits,
            misses=self.misses,
            ratio=self.hits / total if total else None,
            bytes=sum(len(v) for v in self._data.values()),
            calls=total,
        )

    def store_handle(self) -> RedisSortedSetStore:
        return self._store


store = RedisSortedSetStore.from_url(
    os.environ.get("REDIS_URL", "redis://localhost:6379/0"), prefix="example"
)
cache = CountingCache(store)
metrics = CacheMetrics(cache, MetricsConfig.from_env())
runtime = EmbeddedRuntime(metrics, discard_interval_seconds=60)


async def _send(send, status: int, content_type: str, body: str) -> None:
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def application(scope, receive, send) -> None:
    if scope["type"] == "lifespan":
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await runtime.start()
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await runtime.stop()
                await store.close()
                await send({"type": "lifespan.shutdown.complete"})
                return

    if scope["path"] == "/stats":
        snapshots = await metrics.get()
        body = json.dumps([s.to_dict() for s in snapshots])
        await _send(send, 200, "application/json", body)
        return

    if cache.get("greeting") is None:
        cache.set("greeting", b"OK")
    await _send(send, 200, "text/plain", "OK")


app = CacheMetricsMiddleware(application, metrics, exclude_paths=["/stats"])
