"""Embedded runtime that sweeps expired snapshots in the background."""

import asyncio
import contextlib
import logging
from types import TracebackType

from cachestats.core.service import CacheMetrics

logger = logging.getLogger(__name__)


class EmbeddedRuntime:
    """Runs CacheMetrics.discard() on a fixed interval inside an event loop.

    Example:
        ```python
        runtime = EmbeddedRuntime(metrics, discard_interval_seconds=60)
        await runtime.start()
        ...
        await runtime.stop()
        ```
    """

    def __init__(
        self, metrics: CacheMetrics, discard_interval_seconds: float = 60
    ) -> None:
        self.metrics = metrics
        self.discard_interval_seconds = discard_interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Fire a single discard.

        Returns:
            Number of snapshots removed.
        """
        try:
            return await self.metrics.discard()
        except Exception:
            logger.exception("Discarding expired snapshots failed")
            return 0

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self.discard_interval_seconds)

    async def start(self) -> None:
        """Start the background discard task. No-op if already running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Cancel the background discard task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def __aenter__(self) -> "EmbeddedRuntime":
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()
