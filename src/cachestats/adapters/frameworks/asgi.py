"""ASGI middleware that records a cache snapshot after every request.

Framework-agnostic: works with any ASGI server or framework (uvicorn,
Starlette, FastAPI, Django ASGI) without requiring them as dependencies.
"""

import fnmatch
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from cachestats.core.service import CacheMetrics

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]


class CacheMetricsMiddleware:
    """ASGI middleware that triggers CacheMetrics.record() per request.

    The end of a request is the unit of work after which the cache counters
    are snapshotted. Recording happens after the wrapped app has finished,
    including when it raised; recording failures never reach the client.
    """

    def __init__(
        self,
        app: ASGIApp,
        metrics: CacheMetrics,
        exclude_paths: list[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            metrics: Facade used to record snapshots.
            exclude_paths: Paths for which no snapshot is recorded. Supports
                exact matches and wildcard patterns (e.g., "/static/*").
        """
        self.app = app
        self.metrics = metrics
        self.exclude_paths = exclude_paths or []

    def _path_excluded(self, path: str) -> bool:
        """Check if path matches any pattern in exclude_paths."""
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI callable interface that processes requests through the wrapped app."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        finally:
            if not self._path_excluded(scope.get("path", "")):
                await self._record()

    async def _record(self) -> None:
        try:
            await self.metrics.record()
        except Exception:
            logger.exception("Recording cache metrics failed")
